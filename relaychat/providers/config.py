"""Provider configuration models.

Pydantic-based configuration resolved per request from the endpoint
variant's model table and the environment settings.
"""

from pydantic import BaseModel, Field, field_validator


class ModelSpec(BaseModel):
    """Model choice pinned by an endpoint variant for one provider.

    Attributes:
        model_name: Model identifier, or None for the provider default.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
    """

    model_config = {"frozen": True}

    model_name: str | None = None
    temperature: float = Field(default=0.8, ge=0.0, le=2.0)


class ProviderConfig(BaseModel):
    """Concrete configuration for one provider handle.

    Attributes:
        api_key: API key for model access.
        model_name: Model identifier to use.
        temperature: Sampling temperature.
    """

    api_key: str = Field(..., description="API key for the LLM provider")
    model_name: str = Field(..., min_length=1, description="Model to use")
    temperature: float = Field(
        default=0.8,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required")
        return v.strip()
