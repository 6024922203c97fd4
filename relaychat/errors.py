"""Error taxonomy for the relay.

Every failure that can happen before the first streamed byte is a
``RelayError`` and is rendered as ``{"error": message}`` by the API layer.
"""


class RelayError(Exception):
    """Base class for failures reported in the JSON error envelope."""

    status_code: int = 500


class BadRequest(RelayError):
    """Raised when the request body is malformed or missing required fields."""


class UnsupportedModel(RelayError):
    """Raised when the model selector names no registered provider."""

    def __init__(self, model_type: str) -> None:
        super().__init__(f"Unsupported model type: {model_type}")
        self.model_type = model_type


class MissingCredential(RelayError):
    """Raised when a provider's API key is not configured."""

    def __init__(self, env_var: str) -> None:
        super().__init__(f"{env_var} is missing. Please set it in your .env file.")
        self.env_var = env_var


class UnsupportedFileType(RelayError):
    """Raised when no extractor is registered for a document MIME type."""

    def __init__(self, mime_type: str | None) -> None:
        super().__init__(f"Unsupported file type: {mime_type}")
        self.mime_type = mime_type


class ExtractionFailure(RelayError):
    """Raised when a document cannot be parsed."""


class ProviderFailure(RelayError):
    """Raised when the upstream call fails before any output was produced."""


class StreamInterrupted(RelayError):
    """Raised when the upstream call fails after output was already relayed.

    Never reaches the error envelope: by then the response status is sent.
    """
