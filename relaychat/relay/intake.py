"""Request body validation for the relay endpoints."""

from typing import Any

from pydantic import ValidationError

from relaychat.errors import BadRequest
from relaychat.models.schemas import ChatRequest


def _describe(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in error.errors()
    )


def parse_chat_request(payload: Any) -> ChatRequest:
    """Validate a decoded JSON body.

    Args:
        payload: Decoded JSON value.

    Returns:
        Validated request with at least one message.

    Raises:
        BadRequest: If the body is not an object, has no messages, or a
            message is malformed.
    """
    if not isinstance(payload, dict):
        raise BadRequest("Request body must be a JSON object")

    if not payload.get("messages"):
        raise BadRequest("messages must contain at least one message")

    try:
        return ChatRequest.model_validate(payload)
    except ValidationError as e:
        raise BadRequest(f"Invalid request body: {_describe(e)}") from e
