"""Relay endpoints.

One POST route per variant under ``/api``; all of them run the same
pipeline. Failures before the first fragment are raised as ``RelayError``
and rendered by the app's exception handler.
"""

import json
import logging
from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse

from relaychat.config import Settings, get_settings
from relaychat.errors import BadRequest
from relaychat.models.schemas import ErrorResponse, VariantInfo
from relaychat.providers import ProviderRegistry, get_provider_registry
from relaychat.relay import (
    VARIANTS,
    RelayService,
    RelayVariant,
    SSEEncoder,
    TextEncoder,
    parse_chat_request,
    relay_stream,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

RelayEndpoint = Callable[..., Awaitable[StreamingResponse]]


async def _read_json(request: Request) -> object:
    """Decode the request body.

    Raises:
        BadRequest: If the body is not valid JSON.
    """
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequest(f"Request body is not valid JSON: {e}") from e


def _wants_sse(request: Request) -> bool:
    return "text/event-stream" in request.headers.get("accept", "")


def _make_endpoint(variant: RelayVariant) -> RelayEndpoint:
    async def relay_endpoint(
        request: Request,
        model_type: str | None = Query(
            None,
            alias="modelType",
            description="Provider selector: openai or gemini (default openai)",
        ),
        registry: ProviderRegistry = Depends(get_provider_registry),
        settings: Settings = Depends(get_settings),
    ) -> StreamingResponse:
        chat_request = parse_chat_request(await _read_json(request))

        service = RelayService(variant, registry, settings)
        stream = await service.open_stream(chat_request, model_type)

        encoder = SSEEncoder() if _wants_sse(request) else TextEncoder()
        return StreamingResponse(
            relay_stream(stream, encoder),
            media_type=encoder.media_type,
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    relay_endpoint.__name__ = f"relay_{variant.name}"
    relay_endpoint.__doc__ = (
        f"{variant.label} chat relay.\n\n"
        "Streams the model response as plain text, or as SSE StreamChunk "
        "frames when the request accepts text/event-stream."
    )
    return relay_endpoint


@router.get("/variants", response_model=list[VariantInfo])
async def list_variants() -> list[VariantInfo]:
    """List the relay endpoint variants."""
    return [variant.info() for variant in VARIANTS.values()]


for _variant in VARIANTS.values():
    router.add_api_route(
        f"/{_variant.name}",
        _make_endpoint(_variant),
        methods=["POST"],
        response_class=StreamingResponse,
        responses={500: {"model": ErrorResponse, "description": "Upfront failure"}},
        summary=f"{_variant.label} chat relay",
    )
