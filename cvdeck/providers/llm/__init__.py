"""Language model access for the persona chat and contact extraction.

``LLMExecutor`` maps a ``provider/model`` string onto an Agno model class
and walks a fallback chain; ``MockLLMExecutor`` replays canned output.
"""

from cvdeck.providers.llm.base import (
    AuthenticationError,
    LLMMessage,
    LLMResponse,
    ProviderError,
    RateLimitError,
    StructuredOutputError,
)
from cvdeck.providers.llm.executor import (
    LLMExecutor,
    create_executor_from_step_config,
)
from cvdeck.providers.llm.mock import MockLLMExecutor

__all__ = [
    "AuthenticationError",
    "LLMExecutor",
    "LLMMessage",
    "LLMResponse",
    "MockLLMExecutor",
    "ProviderError",
    "RateLimitError",
    "StructuredOutputError",
    "create_executor_from_step_config",
]
