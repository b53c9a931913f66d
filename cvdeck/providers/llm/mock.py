"""Scriptable stand-in for LLMExecutor, used by tests and local runs."""

from collections.abc import AsyncIterator
from typing import Any, TypeVar

from pydantic import BaseModel

from cvdeck.providers.llm.base import LLMMessage, LLMResponse, StructuredOutputError
from cvdeck.providers.llm.executor import LLMExecutor, extract_json_block

T = TypeVar("T", bound=BaseModel)


class MockLLMExecutor(LLMExecutor):
    """LLMExecutor that returns configured responses without API calls.

    ``structured_response`` is the raw text the model would have produced
    for a structured request. Setting ``error`` makes every call raise it.
    """

    def __init__(
        self,
        default_response: str = "Mock response",
        structured_response: str = "{}",
        stream_chunk_size: int = 10,
        error: Exception | None = None,
        step_name: str | None = "mock",
    ) -> None:
        super().__init__(model="mock/test", step_name=step_name)
        self.default_response = default_response
        self.structured_response = structured_response
        self.stream_chunk_size = stream_chunk_size
        self.error = error
        self._call_history: list[dict[str, Any]] = []

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Return history of calls for testing assertions."""
        return self._call_history

    def clear_history(self) -> None:
        self._call_history.clear()

    async def generate(self, messages: list[LLMMessage]) -> LLMResponse:
        self._call_history.append({"kind": "generate", "messages": messages})
        if self.error is not None:
            raise self.error
        return LLMResponse(
            content=self.default_response,
            model=self.model,
            finish_reason="stop",
        )

    async def generate_structured(
        self,
        prompt: str,
        schema: type[T],
        *,
        system_prompt: str | None = None,
    ) -> tuple[T, LLMResponse]:
        self._call_history.append({
            "kind": "structured",
            "prompt": prompt,
            "schema": schema,
            "system_prompt": system_prompt,
        })
        if self.error is not None:
            raise self.error

        content = extract_json_block(self.structured_response)
        try:
            parsed = schema.model_validate_json(content)
        except ValueError as e:
            raise StructuredOutputError(f"Failed to parse structured response: {e}") from e

        response = LLMResponse(content=content, model=self.model, finish_reason="stop")
        return parsed, response

    async def generate_stream(self, messages: list[LLMMessage]) -> AsyncIterator[str]:
        """Stream the default response in fixed-size chunks."""
        self._call_history.append({"kind": "stream", "messages": messages})
        if self.error is not None:
            raise self.error

        content = self.default_response
        for i in range(0, len(content), self.stream_chunk_size):
            yield content[i:i + self.stream_chunk_size]
