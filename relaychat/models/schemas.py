from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class StreamStatus(str, Enum):
    """Status values carried by SSE stream frames."""

    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class ChatMessage(BaseModel):
    """A single chat message in the conversation.

    Attributes:
        role: The speaker identifier (user or assistant).
        content: The message text.
    """

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request payload for the relay endpoints.

    Attributes:
        messages: Full conversation, oldest first; the last entry is the current turn.
        file: Base64 data URL (or bare base64) of an uploaded document.
        file_type: Declared MIME type of ``file`` (``fileType`` on the wire).
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    file: str | None = None
    file_type: str | None = Field(None, alias="fileType")


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text content of this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (generating, complete, error).
        error: Error message if the stream was interrupted.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None


class ErrorResponse(BaseModel):
    """JSON envelope for failures raised before streaming starts."""

    error: str


class VariantInfo(BaseModel):
    """Public description of an endpoint variant.

    Attributes:
        name: Route name (``ex1`` .. ``ex5``).
        label: Button label shown by the client.
        fixed_provider: Provider used regardless of ``modelType``, if any.
        requires_file: Whether the client must attach a document.
    """

    name: str
    label: str
    fixed_provider: str | None = None
    requires_file: bool = False
