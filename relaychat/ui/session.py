"""Client-side chat state and stream consumption.

Kept free of NiceGUI so the state machine can be driven from tests.
"""

import base64
import json
import os
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import NamedTuple

import httpx

from relaychat.relay.variants import DEFAULT_PROVIDER, VARIANTS, ContextSource

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


class ClientState(str, Enum):
    """Conversation state as seen by the client."""

    IDLE = "idle"
    AWAITING = "awaiting"
    STREAMING = "streaming"


class AttachedFile(NamedTuple):
    name: str
    mime_type: str
    data_url: str


class ChatSession:
    """Manages chat state for a user session.

    Idle -> Awaiting (request sent) -> Streaming (chunks arriving) -> Idle.
    Failures in Awaiting or Streaming return to Idle and keep whatever
    assistant text already arrived.
    """

    def __init__(self, variant: str = "ex1", model_type: str = DEFAULT_PROVIDER) -> None:
        self.messages: list[dict] = []
        self.variant = variant
        self.model_type = model_type
        self.file: AttachedFile | None = None
        self.state = ClientState.IDLE
        self.last_error: str | None = None

    @property
    def is_busy(self) -> bool:
        return self.state is not ClientState.IDLE

    @property
    def requires_file(self) -> bool:
        return VARIANTS[self.variant].context_source is ContextSource.UPLOAD

    @property
    def provider_fixed(self) -> bool:
        return VARIANTS[self.variant].fixed_provider is not None

    def add_message(self, role: str, content: str) -> None:
        self.messages.append({
            "role": role,
            "content": content,
            "time": datetime.now().strftime("%I:%M %p"),
        })

    def select_variant(self, variant: str) -> None:
        """Switch endpoint variant; any attached file is dropped."""
        if variant not in VARIANTS:
            raise ValueError(f"Unknown variant: {variant}")
        self.variant = variant
        self.file = None

    def select_model(self, model_type: str) -> None:
        self.model_type = model_type

    def attach_file(self, name: str, data: bytes, mime_type: str) -> None:
        encoded = base64.b64encode(data).decode("ascii")
        self.file = AttachedFile(name, mime_type, f"data:{mime_type};base64,{encoded}")

    def can_submit(self, text: str) -> bool:
        if self.is_busy:
            return False
        if self.requires_file:
            return self.file is not None
        return bool(text.strip())

    def begin_turn(self, text: str) -> None:
        if self.is_busy:
            raise RuntimeError("A response is already in progress")
        self.add_message("user", text)
        self.last_error = None
        self.state = ClientState.AWAITING

    def receive_chunk(self, content: str) -> None:
        if self.state is ClientState.AWAITING:
            self.add_message("assistant", "")
            self.state = ClientState.STREAMING
        self.messages[-1]["content"] += content

    def complete(self) -> None:
        self.state = ClientState.IDLE

    def fail(self, error: str) -> None:
        self.last_error = error
        self.state = ClientState.IDLE

    def endpoint_path(self) -> str:
        return f"/api/{self.variant}"

    def request_params(self) -> dict[str, str]:
        return {"modelType": self.model_type}

    def request_body(self) -> dict:
        body: dict = {
            "messages": [
                {"role": m["role"], "content": m["content"]} for m in self.messages
            ],
        }
        if self.requires_file and self.file is not None:
            body["file"] = self.file.data_url
            body["fileType"] = self.file.mime_type
        return body


def _error_from_response(response: httpx.Response) -> str:
    try:
        return response.json()["error"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP {response.status_code}"


async def stream_chat_response(
    session: ChatSession,
    on_chunk: Callable[[str], None],
    on_complete: Callable[[], None],
    on_error: Callable[[str], None],
    base_url: str = API_BASE_URL,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Send the session's conversation and consume the SSE response.

    Exactly one of ``on_complete`` / ``on_error`` is called. A stream that
    ends without a terminal frame is reported as a dropped connection.
    """
    async with httpx.AsyncClient(
        base_url=base_url, timeout=120.0, transport=transport
    ) as client:
        try:
            async with client.stream(
                "POST",
                session.endpoint_path(),
                params=session.request_params(),
                json=session.request_body(),
                headers={"Accept": "text/event-stream"},
            ) as response:
                if response.is_error:
                    await response.aread()
                    on_error(_error_from_response(response))
                    return
                async for line in response.aiter_lines():
                    if not line.startswith("data: "):
                        continue
                    data = json.loads(line[6:])
                    if data.get("error"):
                        on_error(data["error"])
                        return
                    if data.get("done"):
                        on_complete()
                        return
                    if content := data.get("content"):
                        on_chunk(content)
                on_error("Connection closed before the response completed")
        except httpx.RequestError as e:
            on_error(f"Connection failed: {e}")
        except json.JSONDecodeError as e:
            on_error(f"Malformed stream frame: {e}")
