"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Individual message in conversation
    - ChatRequest: Incoming relay request payload
    - StreamChunk: One SSE frame of a streamed response
    - ErrorResponse: Error envelope for upfront failures
    - VariantInfo: Endpoint variant listing for the client
"""

from relaychat.models.schemas import (
    ChatMessage,
    ChatRequest,
    ErrorResponse,
    StreamChunk,
    StreamStatus,
    VariantInfo,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ErrorResponse",
    "StreamChunk",
    "StreamStatus",
    "VariantInfo",
]
