"""Agno-backed providers with streaming support.

Each request builds its own Agno ``Agent`` around a freshly configured
model. The agent carries no storage, knowledge or history: the client
resends the conversation and the relay flattens it into the prompt.
"""

import logging
from collections.abc import AsyncGenerator
from typing import ClassVar

from agno.agent import Agent
from agno.models.base import Model
from agno.models.google import Gemini
from agno.models.openai import OpenAIChat
from agno.run.agent import RunEvent

from relaychat.config import Settings
from relaychat.errors import MissingCredential, ProviderFailure
from relaychat.providers.base import default_registry
from relaychat.providers.config import ModelSpec, ProviderConfig

logger = logging.getLogger(__name__)


class AgnoChatProvider:
    """Wraps an Agno agent behind the ``stream_generate`` interface.

    Subclasses choose the Agno model class and where the API key comes from.
    """

    name: ClassVar[str]
    api_key_env: ClassVar[str]

    def __init__(self, config: ProviderConfig) -> None:
        """Initialize the provider.

        Args:
            config: Resolved API key, model id and temperature.
        """
        self._config = config
        self._agent = self._create_agent()

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @classmethod
    def api_key(cls, settings: Settings) -> str:
        raise NotImplementedError

    @classmethod
    def default_model(cls, settings: Settings) -> str:
        raise NotImplementedError

    @classmethod
    def from_settings(cls, spec: ModelSpec, settings: Settings) -> "AgnoChatProvider":
        """Resolve credentials and model id, then build the provider.

        Raises:
            MissingCredential: If the API key is not configured.
        """
        api_key = cls.api_key(settings)
        if not api_key:
            logger.error(f"{cls.api_key_env} not found in environment variables.")
            raise MissingCredential(cls.api_key_env)

        return cls(
            ProviderConfig(
                api_key=api_key,
                model_name=spec.model_name or cls.default_model(settings),
                temperature=spec.temperature,
            )
        )

    def _create_model(self) -> Model:
        raise NotImplementedError

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Stateless Agent that sends the prompt verbatim.
        """
        return Agent(
            model=self._create_model(),
            markdown=False,
            telemetry=False,
        )

    async def stream_generate(self, prompt: str) -> AsyncGenerator[str]:
        """Stream response fragments for a prompt.

        Args:
            prompt: Fully rendered prompt text.

        Yields:
            Text fragments as they arrive.

        Raises:
            ProviderFailure: If Agno reports a run error.
        """
        response_stream = self._agent.arun(prompt, stream=True)

        async for event in response_stream:
            if event.event == RunEvent.run_error:
                raise ProviderFailure(str(event.content or "Model run failed"))
            if event.event == RunEvent.run_content and event.content:
                yield str(event.content)


@default_registry.register("openai")
class OpenAIProvider(AgnoChatProvider):
    name = "openai"
    api_key_env = "OPENAI_API_KEY"

    @classmethod
    def api_key(cls, settings: Settings) -> str:
        return settings.openai_api_key

    @classmethod
    def default_model(cls, settings: Settings) -> str:
        return "gpt-4o-mini"

    def _create_model(self) -> OpenAIChat:
        return OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
        )


@default_registry.register("gemini")
class GeminiProvider(AgnoChatProvider):
    name = "gemini"
    api_key_env = "GOOGLE_GEN_AI_API_KEY"

    @classmethod
    def api_key(cls, settings: Settings) -> str:
        return settings.google_api_key

    @classmethod
    def default_model(cls, settings: Settings) -> str:
        return settings.gemini_model

    def _create_model(self) -> Gemini:
        return Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
        )
