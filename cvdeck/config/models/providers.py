"""AI provider configuration models."""

from pydantic import BaseModel, Field


class LLMStepConfig(BaseModel):
    """Model settings for one kind of LLM call.

    Model strings use the executor's routing prefixes, e.g.
    ``openai/gpt-4o`` or ``mock/dev``.
    """

    model: str = Field(default="openai/gpt-4o", description="Primary model string")
    fallback_models: list[str] = Field(
        default_factory=list,
        description="Models to try if the primary fails",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    max_tokens: int = Field(default=2000, gt=0, description="Max tokens to generate")
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")


def _default_extraction() -> LLMStepConfig:
    return LLMStepConfig(temperature=0.1, max_tokens=512, timeout=30.0)


class LLMProvidersConfig(BaseModel):
    """LLM settings for the persona chat and contact extraction."""

    chat: LLMStepConfig = Field(
        default_factory=LLMStepConfig,
        description="Streaming persona chat",
    )
    extraction: LLMStepConfig = Field(
        default_factory=_default_extraction,
        description="Structured contact extraction",
    )


class ProvidersConfig(BaseModel):
    """AI provider configuration."""

    llm: LLMProvidersConfig = Field(
        default_factory=LLMProvidersConfig,
        description="LLM provider settings",
    )
