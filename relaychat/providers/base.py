"""Provider interface and name-based registry.

A provider is anything that turns a prompt into an async stream of text
fragments. Concrete providers register themselves under the selector the
client sends in ``modelType``.
"""

import logging
from collections.abc import AsyncIterator, Callable
from typing import Protocol, runtime_checkable

from relaychat.config import Settings
from relaychat.errors import UnsupportedModel
from relaychat.providers.config import ModelSpec

logger = logging.getLogger(__name__)


@runtime_checkable
class TextGenerationProvider(Protocol):
    """Streams generated text for a prompt."""

    name: str

    def stream_generate(self, prompt: str) -> AsyncIterator[str]:
        """Yield text fragments in the order the model produces them."""
        ...


ProviderFactory = Callable[[ModelSpec, Settings], TextGenerationProvider]


class ProviderRegistry:
    """Maps model selectors to provider factories."""

    def __init__(self) -> None:
        self._factories: dict[str, ProviderFactory] = {}

    def add(self, name: str, factory: ProviderFactory) -> None:
        self._factories[name] = factory

    def register(self, name: str) -> Callable[[type], type]:
        """Class decorator registering ``cls.from_settings`` under ``name``."""

        def decorator(provider_cls: type) -> type:
            self.add(name, provider_cls.from_settings)
            return provider_cls

        return decorator

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def create(
        self, name: str, spec: ModelSpec, settings: Settings
    ) -> TextGenerationProvider:
        """Build a fresh provider handle.

        Args:
            name: Model selector (e.g. ``openai``).
            spec: Model id and temperature pinned by the endpoint variant.
            settings: Environment settings holding the credentials.

        Returns:
            A configured provider.

        Raises:
            UnsupportedModel: If no provider is registered under ``name``.
            MissingCredential: If the provider's API key is not configured.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise UnsupportedModel(name)
        logger.info(f"Initializing provider: {name} | Model: {spec.model_name or 'default'}")
        return factory(spec, settings)


# Module-level registry populated by provider modules on import
default_registry = ProviderRegistry()


def get_provider_registry() -> ProviderRegistry:
    """FastAPI dependency returning the registry used by the relay."""
    return default_registry
