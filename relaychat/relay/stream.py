"""Stream forwarding from a provider to the HTTP response.

The provider stream is primed (first fragment pulled) before the response
starts, so failures with no output still reach the JSON error envelope.
After that, fragments are forwarded one by one as they arrive and the
stream is closed in a way the client can tell apart from a dropped
connection:

- plain text: fragments concatenated; a failure appends ``ERROR_SENTINEL``
- SSE: one ``StreamChunk`` frame per fragment, then a ``done`` frame whose
  status is ``complete`` or ``error``
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, AsyncIterator

from relaychat.errors import ProviderFailure, RelayError, StreamInterrupted
from relaychat.models.schemas import StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"
SSE_MEDIA_TYPE = "text/event-stream"

ERROR_SENTINEL = "\n\n[Error: {message}]"


async def _aclose(stream: AsyncIterator[str]) -> None:
    aclose = getattr(stream, "aclose", None)
    if aclose is not None:
        await aclose()


async def _resume(first: str | None, stream: AsyncIterator[str]) -> AsyncGenerator[str]:
    try:
        if first is not None:
            yield first
        async for fragment in stream:
            yield fragment
    finally:
        await _aclose(stream)


async def prime_stream(fragments: AsyncIterator[str]) -> AsyncGenerator[str]:
    """Pull the first fragment so early failures surface before streaming.

    Args:
        fragments: Provider output.

    Returns:
        A stream yielding the same fragments, first one included.

    Raises:
        ProviderFailure: If the provider fails before producing output.
    """
    stream = aiter(fragments)
    try:
        first = await anext(stream)
    except StopAsyncIteration:
        logger.warning("Provider produced an empty stream")
        first = None
    except RelayError:
        await _aclose(stream)
        raise
    except Exception as e:
        await _aclose(stream)
        raise ProviderFailure(f"Provider call failed: {e}") from e
    return _resume(first, stream)


class TextEncoder:
    """Raw text body; interruption is marked by a trailing sentinel."""

    media_type = TEXT_MEDIA_TYPE

    def fragment(self, text: str) -> str:
        return text

    def complete(self) -> str:
        return ""

    def error(self, error: StreamInterrupted) -> str:
        return ERROR_SENTINEL.format(message=error)


class SSEEncoder:
    """Server-Sent Events carrying ``StreamChunk`` JSON."""

    media_type = SSE_MEDIA_TYPE

    @staticmethod
    def _frame(chunk: StreamChunk) -> str:
        return f"data: {chunk.model_dump_json()}\n\n"

    def fragment(self, text: str) -> str:
        return self._frame(StreamChunk(content=text, done=False, status=StreamStatus.GENERATING))

    def complete(self) -> str:
        return self._frame(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))

    def error(self, error: StreamInterrupted) -> str:
        return self._frame(
            StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(error))
        )


StreamEncoder = TextEncoder | SSEEncoder


async def relay_stream(
    stream: AsyncIterator[str],
    encoder: StreamEncoder,
) -> AsyncGenerator[str]:
    """Forward fragments to the client as they arrive.

    A client disconnect cancels this generator, which closes ``stream`` and
    with it the upstream model call.

    Args:
        stream: Primed provider stream.
        encoder: Wire format for fragments and the closing frame.

    Yields:
        Encoded response body pieces.
    """
    count = 0
    try:
        async for fragment in stream:
            count += 1
            yield encoder.fragment(fragment)
    except asyncio.CancelledError:
        logger.info(f"Client disconnected after {count} fragment(s), cancelling upstream call")
        raise
    except Exception as e:
        interrupted = StreamInterrupted(str(e) or type(e).__name__)
        logger.error(f"Stream interrupted after {count} fragment(s): {interrupted}")
        yield encoder.error(interrupted)
        return
    finally:
        await _aclose(stream)

    logger.info(f"Stream completed with {count} fragment(s)")
    closing = encoder.complete()
    if closing:
        yield closing
