"""Agno-backed executor for the persona chat and contact extraction calls.

A model string names the provider and the model, ``<provider>/<model>``:

    openai/gpt-4o                        -> OpenAIChat(id="gpt-4o")
    anthropic/claude-3-5-haiku-latest    -> Claude(id="claude-3-5-haiku-latest")
    groq/llama-3.1-70b-versatile         -> Groq(id="llama-3.1-70b-versatile")
    openrouter/anthropic/claude-3-haiku  -> OpenRouter(id="anthropic/claude-3-haiku")
    mock/anything                        -> canned text, no network

Unknown prefixes go to OpenRouter with the full string as the id.
Complete and structured calls walk the fallback chain; streaming uses the
primary model only because a half-streamed reply cannot be retried.
"""

from __future__ import annotations

import importlib
import json
import re
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from cvdeck.observability.logging import get_logger
from cvdeck.observability.metrics import LLM_LATENCY
from cvdeck.providers.llm.base import (
    AuthenticationError,
    LLMMessage,
    LLMResponse,
    ProviderError,
    RateLimitError,
    StructuredOutputError,
)

if TYPE_CHECKING:
    from agno.agent import Agent

    from cvdeck.config.models.providers import LLMStepConfig

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)
R = TypeVar("R")

MOCK_PROVIDER = "mock"

# provider prefix -> (agno module, model class, accepts a timeout)
_AGNO_MODELS: dict[str, tuple[str, str, bool]] = {
    "openai": ("agno.models.openai", "OpenAIChat", True),
    "anthropic": ("agno.models.anthropic", "Claude", False),
    "groq": ("agno.models.groq", "Groq", True),
    "openrouter": ("agno.models.openrouter", "OpenRouter", True),
}

# Streaming runs also emit lifecycle events; only these carry text
_CONTENT_EVENT = "RunContent"

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)

_JSON_INSTRUCTIONS = """{prompt}

Respond with valid JSON matching this schema:
```json
{schema}
```

Output only the JSON, no other text."""


class LLMExecutor:
    """Runs one configured kind of model call.

    Example:
        executor = LLMExecutor("openai/gpt-4o", step_name="chat")
        async for delta in executor.generate_stream(messages):
            ...
    """

    def __init__(
        self,
        model: str,
        fallback_models: list[str] | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        timeout: float = 60.0,
        step_name: str | None = None,
    ) -> None:
        self._model = model
        self._fallback_models = list(fallback_models or [])
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._step_name = step_name
        self._agents: dict[tuple[str, str | None], Agent] = {}

    @property
    def model(self) -> str:
        return self._model

    @property
    def step_name(self) -> str | None:
        return self._step_name

    @property
    def is_mock(self) -> bool:
        return self._parse_model(self._model)[0] == MOCK_PROVIDER

    @property
    def _step_label(self) -> str:
        return self._step_name or "unknown"

    async def generate(self, messages: list[LLMMessage]) -> LLMResponse:
        """Complete ``messages``, trying fallback models in order.

        Raises:
            ProviderError: When every model failed
        """
        return await self._with_fallback(
            lambda model: self._generate_with_model(model, messages)
        )

    async def generate_structured(
        self,
        prompt: str,
        schema: type[T],
        *,
        system_prompt: str | None = None,
    ) -> tuple[T, LLMResponse]:
        """Ask for JSON matching ``schema`` and parse it.

        Output that does not validate counts as a failure of that model,
        so the next fallback is tried.
        """
        request = _JSON_INSTRUCTIONS.format(
            prompt=prompt,
            schema=json.dumps(schema.model_json_schema(), indent=2),
        )
        messages = [LLMMessage(role="user", content=request)]
        if system_prompt:
            messages.insert(0, LLMMessage(role="system", content=system_prompt))

        async def attempt(model: str) -> tuple[T, LLMResponse]:
            response = await self._generate_with_model(model, messages)
            return self._parse_structured(response, schema), response

        return await self._with_fallback(attempt)

    async def generate_stream(self, messages: list[LLMMessage]) -> AsyncIterator[str]:
        """Yield text deltas from the primary model.

        A failure before the first delta raises ``ProviderError``; once
        text has been yielded a failure only ends the stream.
        """
        model = self._model
        if self._parse_model(model)[0] == MOCK_PROVIDER:
            yield self._mock_content(model)
            return

        system_prompt = self._get_system_prompt(messages)
        prompt = self._format_messages_for_agno(messages)
        yielded = False
        started_at = time.perf_counter()
        try:
            agent = self._get_or_create_agent(model, system_prompt)
            async for event in agent.arun(prompt, stream=True):
                if getattr(event, "event", _CONTENT_EVENT) != _CONTENT_EVENT:
                    continue
                text = getattr(event, "content", None)
                if text:
                    yielded = True
                    yield text
        except Exception as e:
            if not yielded:
                logger.error("streaming_failed", model=model, step=self._step_name, error=str(e))
                raise self._classify_error(e) from e
            logger.warning("streaming_interrupted", model=model, step=self._step_name, error=str(e))
        finally:
            LLM_LATENCY.labels(step=self._step_label).observe(time.perf_counter() - started_at)

    async def _with_fallback(self, call: Callable[[str], Awaitable[R]]) -> R:
        chain = [self._model, *self._fallback_models]
        last_error: ProviderError | None = None
        for model in chain:
            try:
                return await call(model)
            except ProviderError as e:
                logger.warning(
                    "executor_rate_limited" if isinstance(e, RateLimitError) else "executor_provider_error",
                    model=model,
                    step=self._step_name,
                    error=str(e),
                )
                last_error = e
        raise ProviderError(
            f"All models failed for step {self._step_name}. "
            f"Tried: {chain}. Last error: {last_error}"
        )

    async def _generate_with_model(self, model: str, messages: list[LLMMessage]) -> LLMResponse:
        provider, _ = self._parse_model(model)
        if provider == MOCK_PROVIDER:
            return LLMResponse(content=self._mock_content(model), model=model, finish_reason="stop")

        started_at = time.perf_counter()
        try:
            agent = self._get_or_create_agent(model, self._get_system_prompt(messages))
            run = await agent.arun(self._format_messages_for_agno(messages))
        except Exception as e:
            raise self._classify_error(e) from e
        elapsed = time.perf_counter() - started_at
        LLM_LATENCY.labels(step=self._step_label).observe(elapsed)

        text = str(run.content or "")
        logger.debug(
            "executor_generate_complete",
            model=model,
            step=self._step_name,
            latency_ms=round(elapsed * 1000, 2),
            content_length=len(text),
        )
        return LLMResponse(
            content=text,
            model=model,
            finish_reason="stop",
            metadata={"latency_ms": elapsed * 1000, "provider": provider, "step": self._step_name},
        )

    def _parse_structured(self, response: LLMResponse, schema: type[T]) -> T:
        payload = extract_json_block(response.content)
        try:
            return schema.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(
                "structured_parse_failed",
                schema=schema.__name__,
                model=response.model,
                error_count=e.error_count(),
            )
            raise StructuredOutputError(f"Failed to parse structured response: {e}") from e

    def _get_or_create_agent(self, model: str, system_prompt: str | None) -> Agent:
        key = (model, system_prompt)
        agent = self._agents.get(key)
        if agent is None:
            from agno.agent import Agent

            agent = Agent(
                model=self._create_agno_model(model),
                instructions=[system_prompt] if system_prompt else None,
                markdown=False,
            )
            self._agents[key] = agent
        return agent

    def _create_agno_model(self, model: str) -> Any:
        provider, model_id = self._parse_model(model)
        if provider not in _AGNO_MODELS:
            logger.warning("unknown_provider_defaulting_to_openrouter", model=model, provider=provider)
            provider, model_id = "openrouter", model

        module_name, class_name, takes_timeout = _AGNO_MODELS[provider]
        model_cls = getattr(importlib.import_module(module_name), class_name)
        params: dict[str, Any] = {"temperature": self._temperature, "max_tokens": self._max_tokens}
        if takes_timeout:
            params["timeout"] = self._timeout
        return model_cls(id=model_id, **params)

    def _format_messages_for_agno(self, messages: list[LLMMessage]) -> str:
        """Agno runs take one input string; history is rendered as a transcript."""
        turns = [m for m in messages if m.role != "system"]
        if len(turns) == 1:
            return turns[0].content
        labels = {"user": "User", "assistant": "Assistant"}
        return "\n\n".join(
            f"{labels[m.role]}: {m.content}" for m in turns if m.role in labels
        )

    def _get_system_prompt(self, messages: list[LLMMessage]) -> str | None:
        return next((m.content for m in messages if m.role == "system"), None)

    def _classify_error(self, error: Exception) -> ProviderError:
        if isinstance(error, ProviderError):
            return error
        text = str(error).lower()
        if "rate" in text and "limit" in text:
            return RateLimitError(f"Rate limited: {error}")
        if "api key" in text or "401" in text:
            return AuthenticationError(f"Authentication failed: {error}")
        return ProviderError(f"Agno execution failed: {error}")

    def _mock_content(self, model: str) -> str:
        return f"Mock response for {model}"

    def _parse_model(self, model: str) -> tuple[str, str]:
        """Split ``provider/model``; a bare name is treated as a mock model."""
        provider, sep, model_id = model.partition("/")
        if not sep:
            return MOCK_PROVIDER, model
        return provider, model_id


def extract_json_block(content: str) -> str:
    """Strip a markdown code fence around a JSON payload, if present."""
    match = _FENCE_RE.search(content)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return content.strip()


def create_executor_from_step_config(
    step_config: LLMStepConfig,
    step_name: str,
) -> LLMExecutor:
    return LLMExecutor(
        model=step_config.model,
        fallback_models=step_config.fallback_models,
        temperature=step_config.temperature,
        max_tokens=step_config.max_tokens,
        timeout=step_config.timeout,
        step_name=step_name,
    )
