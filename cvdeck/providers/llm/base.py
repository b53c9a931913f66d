"""Message and response types shared by the LLM executors.

Provider failures surface as ``ProviderError`` subclasses. The API maps
them to a 502 for the chat stream and to an empty result for contact
extraction.
"""

from typing import Any

from pydantic import BaseModel, Field


class LLMMessage(BaseModel):
    """One chat message sent to a model."""

    role: str = Field(..., description="system, user or assistant")
    content: str


class LLMResponse(BaseModel):
    """A complete (non-streamed) model answer."""

    content: str
    model: str = Field(..., description="Model string that produced the answer")
    finish_reason: str | None = None
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Step name and latency of the call",
    )


class ProviderError(Exception):
    """A model call failed or produced unusable output."""


class AuthenticationError(ProviderError):
    """The provider rejected the API key."""


class RateLimitError(ProviderError):
    """The provider throttled the request."""


class StructuredOutputError(ProviderError):
    """Model output did not match the requested schema."""
