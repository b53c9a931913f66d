"""HTTP client for the chat services of the CV deck API.

Usage:
    async with ChatAPIClient("http://localhost:8000") as client:
        async for chunk in client.stream_completion(messages):
            print(chunk, end="")
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from cvdeck.contact.partial import PartialContactInfo, normalize_contact_info


class ChatClientError(Exception):
    """Raised on transport failures and unexpected responses."""

    def __init__(self, message: str, status_code: int | None = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class SubmitContactResult(BaseModel):
    """Response of the chat contact submission service."""

    success: bool
    message: str | None = None


async def _text_chunks(response: httpx.Response) -> AsyncIterator[str]:
    async for chunk in response.aiter_text():
        if chunk:
            yield chunk


class ChatAPIClient:
    """Async client for ``/api/chat``, ``/api/chat/extract-contact`` and
    ``/api/chat/submit-contact``.

    Attributes:
        base_url: Base URL of the CV deck API
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the CV deck API
            timeout: Request timeout in seconds
            transport: Custom httpx transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ChatAPIClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    @asynccontextmanager
    async def open_completion(
        self,
        messages: list[dict[str, str]],
    ) -> AsyncIterator[AsyncIterator[str]]:
        """Open the completion stream and hand back its text chunks.

        Entering the block means the API accepted the request; the body
        may still be empty.

        Raises:
            ChatClientError: On transport failure or a non-2xx status
        """
        try:
            async with self._client.stream(
                "POST",
                "/api/chat",
                json={"messages": messages},
            ) as response:
                if response.status_code >= 400:
                    content = await response.aread()
                    raise ChatClientError(
                        message=content.decode("utf-8", errors="replace"),
                        status_code=response.status_code,
                    )
                yield _text_chunks(response)
        except httpx.HTTPError as e:
            raise ChatClientError(f"Completion request failed: {e}") from e

    async def stream_completion(
        self,
        messages: list[dict[str, str]],
    ) -> AsyncIterator[str]:
        """Stream the assistant reply as decoded text chunks.

        Raises:
            ChatClientError: On transport failure or a non-2xx status
        """
        async with self.open_completion(messages) as chunks:
            async for chunk in chunks:
                yield chunk

    async def extract_contact(self, messages: list[dict[str, str]]) -> PartialContactInfo:
        """Ask the extraction service for contact fields.

        Raises:
            ChatClientError: On transport failure, non-2xx status or a
                body that is not a JSON object
        """
        try:
            response = await self._client.post(
                "/api/chat/extract-contact",
                json={"messages": messages},
            )
        except httpx.HTTPError as e:
            raise ChatClientError(f"Extraction request failed: {e}") from e

        if response.status_code >= 400:
            raise ChatClientError(
                message="Extraction request rejected",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ChatClientError("Extraction response is not JSON") from e
        if not isinstance(data, dict):
            raise ChatClientError("Extraction response is not an object", details=data)

        # Null and non-string fields count as not extracted
        fields = {k: v for k, v in data.items() if isinstance(v, str)}
        return normalize_contact_info(PartialContactInfo(**fields))

    async def submit_contact(self, payload: dict[str, str]) -> SubmitContactResult:
        """Post a contact record from the chat.

        A rejection whose body still reports ``success: false`` is returned,
        not raised.

        Raises:
            ChatClientError: On transport failure or an unparseable body
        """
        try:
            response = await self._client.post("/api/chat/submit-contact", json=payload)
        except httpx.HTTPError as e:
            raise ChatClientError(f"Submission request failed: {e}") from e

        try:
            return SubmitContactResult.model_validate_json(response.content)
        except ValidationError as e:
            raise ChatClientError(
                message="Unexpected submission response",
                status_code=response.status_code,
            ) from e
