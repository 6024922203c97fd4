"""FastAPI application factory.

Wires the relay router, CORS, and the JSON error envelope used for every
failure that happens before streaming starts.
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from relaychat import __version__
from relaychat.api.chat import router as chat_router
from relaychat.errors import RelayError
from relaychat.models.schemas import ErrorResponse
from relaychat.providers import default_registry
from relaychat.relay import VARIANTS

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log what the relay serves on startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info(
        f"Starting relaychat API with variants {', '.join(VARIANTS)} "
        f"and providers {', '.join(default_registry.names())}"
    )
    yield
    logger.info("Shutting down relaychat API...")


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Render a pre-stream failure as the JSON error envelope."""
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return JSONResponse(
        ErrorResponse(error=str(exc)).model_dump(),
        status_code=exc.status_code,
    )


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    """Create and configure the relay application.

    Returns:
        FastAPI application with the relay routes under ``/api``.
    """
    application = FastAPI(
        title="relaychat API",
        description=(
            "Streaming chat relay to hosted LLM providers (OpenAI, Gemini). "
            "Builds prompts from per-endpoint templates and conversation history, "
            "optionally adds text extracted from PDF, DOCX or PPTX documents, "
            "and streams the model output back token by token."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    application.add_exception_handler(RelayError, relay_error_handler)
    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "relaychat"}

    return application


app = create_app()
