"""Application settings with environment variable loading.

Settings are rebuilt on every request so a changed ``.env`` or environment
takes effect without restarting the server.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB


def _google_api_key() -> str:
    return os.getenv("GOOGLE_GEN_AI_API_KEY") or os.getenv("GOOGLE_API_KEY", "")


class Settings(BaseModel):
    """Environment-derived configuration for the relay.

    Attributes:
        openai_api_key: Key for the OpenAI provider (OPENAI_API_KEY).
        google_api_key: Key for the Gemini provider
            (GOOGLE_GEN_AI_API_KEY, falling back to GOOGLE_API_KEY).
        gemini_model: Gemini model id used when a variant does not pin one.
        embedded_document_path: Server-side document for the embedded variant.
        max_upload_bytes: Largest decoded upload accepted by the upload variant.
    """

    model_config = ConfigDict(validate_default=True)

    openai_api_key: str = Field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY", ""),
        description="API key for OpenAI",
    )
    google_api_key: str = Field(
        default_factory=_google_api_key,
        description="API key for Google Generative AI",
    )
    gemini_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        description="Default Gemini model id",
    )
    embedded_document_path: Path | None = Field(
        default_factory=lambda: os.getenv("EMBEDDED_DOCUMENT_PATH") or None,
        description="Document used as context by the embedded variant",
    )
    max_upload_bytes: int = Field(
        default_factory=lambda: int(
            os.getenv("MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES))
        ),
        ge=1,
        description="Maximum decoded upload size in bytes",
    )

    @field_validator("openai_api_key", "google_api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip whitespace so a blank key counts as missing."""
        return v.strip()


def get_settings() -> Settings:
    """Create settings from the current environment.

    Returns:
        Settings instance.
    """
    return Settings()
