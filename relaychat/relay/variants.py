"""Endpoint variants.

Every relay route is the same pipeline configured with a different
template, model table, provider pinning, and context source.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from relaychat.models.schemas import VariantInfo
from relaychat.providers.config import ModelSpec
from relaychat.relay.prompt import PromptTemplate

DEFAULT_PROVIDER = "openai"


class ContextSource(str, Enum):
    """Where a variant's ``{context}`` text comes from."""

    NONE = "none"
    UPLOAD = "upload"
    EMBEDDED = "embedded"


class RelayVariant(BaseModel):
    """Configuration of one relay endpoint.

    Attributes:
        name: Route name under ``/api``.
        label: Label shown by the client.
        template: Prompt template text.
        models: Model id and temperature per provider selector.
        fixed_provider: Provider used regardless of ``modelType``.
        context_source: Source of document context, if any.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    template: str
    models: dict[str, ModelSpec] = Field(default_factory=dict)
    fixed_provider: str | None = None
    context_source: ContextSource = ContextSource.NONE

    @property
    def prompt(self) -> PromptTemplate:
        return PromptTemplate(self.template)

    def resolve_provider(self, model_type: str | None) -> str:
        """Return the provider selector to use for a request."""
        if self.fixed_provider:
            return self.fixed_provider
        return model_type or DEFAULT_PROVIDER

    def model_spec(self, provider: str) -> ModelSpec:
        return self.models.get(provider) or ModelSpec()

    def info(self) -> VariantInfo:
        return VariantInfo(
            name=self.name,
            label=self.label,
            fixed_provider=self.fixed_provider,
            requires_file=self.context_source is ContextSource.UPLOAD,
        )


BASIC_TEMPLATE = "{input}"

MODEL_INTRO_TEMPLATE = """Sebelum menjawab pertanyaan berikan terlebih dahulu AI tipe apa yang digunakan {model}, lalu lanjutkan percakapan sebagai berikut, jangan lupa untuk tambahkan enter atau /n setiap menjawab
Percakapan saat ini:
{chat_history}

user: {input}"""

SLANG_TEMPLATE = """Hanya gunakan bahasa gaul Indonesia untuk menjawab pertanyaan dari user

Current conversation:
{chat_history}

user: {input}
assistant:"""

CONTEXT_TEMPLATE = """Answer the user's questions based only on the following context. If the answer is not in the context, reply politely that you do not have that information available.:
==============================
Context: {context}
==============================
Current conversation: {chat_history}

user: {question}
assistant:"""

VARIANTS: dict[str, RelayVariant] = {
    v.name: v
    for v in (
        RelayVariant(
            name="ex1",
            label="Basic",
            template=BASIC_TEMPLATE,
            models={
                "openai": ModelSpec(model_name="gpt-3.5-turbo", temperature=0.8),
                "gemini": ModelSpec(temperature=0.8),
            },
        ),
        RelayVariant(
            name="ex2",
            label="Chains 1",
            template=MODEL_INTRO_TEMPLATE,
            models={
                "openai": ModelSpec(model_name="gpt-4o-mini", temperature=0.8),
                "gemini": ModelSpec(temperature=0.8),
            },
        ),
        RelayVariant(
            name="ex3",
            label="Chains 2",
            template=SLANG_TEMPLATE,
            models={
                "openai": ModelSpec(model_name="gpt-4o-mini", temperature=0.8),
                "gemini": ModelSpec(temperature=0.8),
            },
        ),
        RelayVariant(
            name="ex4",
            label="Embedded",
            template=CONTEXT_TEMPLATE,
            models={"openai": ModelSpec(model_name="gpt-4o-mini", temperature=0.8)},
            fixed_provider="openai",
            context_source=ContextSource.EMBEDDED,
        ),
        RelayVariant(
            name="ex5",
            label="Uploaded",
            template=CONTEXT_TEMPLATE,
            models={"openai": ModelSpec(model_name="gpt-4o-mini", temperature=1.0)},
            fixed_provider="openai",
            context_source=ContextSource.UPLOAD,
        ),
    )
}

