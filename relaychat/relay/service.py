"""Relay pipeline for one request.

Order of work: provider selection, document context, prompt rendering,
upstream call. Everything up to and including the first fragment can
raise a ``RelayError``; nothing has been sent to the client at that point.
"""

import logging
from collections.abc import AsyncGenerator

from starlette.concurrency import run_in_threadpool

from relaychat.config import Settings
from relaychat.errors import BadRequest, ProviderFailure, RelayError
from relaychat.models.schemas import ChatRequest
from relaychat.parsing import load_document_from_base64, load_document_from_path
from relaychat.providers.base import ProviderRegistry, TextGenerationProvider
from relaychat.relay.prompt import split_conversation
from relaychat.relay.stream import prime_stream
from relaychat.relay.variants import ContextSource, RelayVariant

logger = logging.getLogger(__name__)


class RelayService:
    """Runs one variant's pipeline against the configured providers."""

    def __init__(
        self,
        variant: RelayVariant,
        registry: ProviderRegistry,
        settings: Settings,
    ) -> None:
        self._variant = variant
        self._registry = registry
        self._settings = settings

    @property
    def variant(self) -> RelayVariant:
        return self._variant

    def select_provider(self, model_type: str | None) -> TextGenerationProvider:
        """Build a provider for this request.

        Raises:
            UnsupportedModel: If the selector is not registered.
            MissingCredential: If the provider has no API key.
            ProviderFailure: If the provider cannot be constructed.
        """
        name = self._variant.resolve_provider(model_type)
        try:
            return self._registry.create(name, self._variant.model_spec(name), self._settings)
        except RelayError:
            raise
        except Exception as e:
            raise ProviderFailure(f"Failed to initialize {name} provider: {e}") from e

    async def load_context(self, request: ChatRequest) -> str | None:
        """Extract document text for variants that use one.

        Parsing runs in the threadpool; it is CPU-bound library code.
        """
        source = self._variant.context_source
        if source is ContextSource.UPLOAD:
            if not request.file:
                raise BadRequest("file is required for this endpoint")
            document = await run_in_threadpool(
                load_document_from_base64,
                request.file,
                request.file_type,
                self._settings.max_upload_bytes,
            )
        elif source is ContextSource.EMBEDDED:
            document = await run_in_threadpool(
                load_document_from_path, self._settings.embedded_document_path
            )
        else:
            return None
        return document.text

    def build_prompt(
        self, request: ChatRequest, provider_name: str, context: str | None = None
    ) -> str:
        """Render the variant template for a request."""
        conversation = split_conversation(request.messages)
        values = {
            "chat_history": conversation.history,
            "input": conversation.current,
            "question": conversation.current,
            "model": provider_name,
        }
        if context is not None:
            values["context"] = context
        return self._variant.prompt.render(values)

    async def open_stream(
        self, request: ChatRequest, model_type: str | None = None
    ) -> AsyncGenerator[str]:
        """Start the upstream call and return its primed fragment stream.

        Args:
            request: Validated request body.
            model_type: Raw ``modelType`` query value.

        Returns:
            Stream of text fragments, first fragment already received.
        """
        provider = self.select_provider(model_type)
        context = await self.load_context(request)
        prompt = self.build_prompt(request, provider.name, context)

        logger.info(
            f"Relaying {self._variant.name} via {provider.name} "
            f"({len(request.messages)} message(s), {len(prompt)} prompt chars)"
        )

        try:
            fragments = provider.stream_generate(prompt)
        except RelayError:
            raise
        except Exception as e:
            raise ProviderFailure(f"Provider call failed: {e}") from e

        return await prime_stream(fragments)
