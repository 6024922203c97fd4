"""LLM providers behind a single streaming interface.

Responsibilities:
    - Provider registry keyed by the client's ``modelType`` selector
    - Credential lookup with fail-fast errors
    - OpenAI and Gemini handles built on Agno models
    - Streaming token generation

Importing this package registers the built-in providers.
"""

from relaychat.providers.agno_chat import AgnoChatProvider, GeminiProvider, OpenAIProvider
from relaychat.providers.base import (
    ProviderRegistry,
    TextGenerationProvider,
    default_registry,
    get_provider_registry,
)
from relaychat.providers.config import ModelSpec, ProviderConfig

__all__ = [
    "AgnoChatProvider",
    "GeminiProvider",
    "ModelSpec",
    "OpenAIProvider",
    "ProviderConfig",
    "ProviderRegistry",
    "TextGenerationProvider",
    "default_registry",
    "get_provider_registry",
]
