"""Unit tests for ContactReconciler."""

from unittest.mock import AsyncMock

import pytest

from cvdeck.chatwidget.client import ChatAPIClient, ChatClientError, SubmitContactResult
from cvdeck.chatwidget.contact_store import PartialContactStore
from cvdeck.chatwidget.reconciler import (
    DEFAULT_SUBMISSION_MESSAGE,
    ContactReconciler,
    build_submission_message,
)
from cvdeck.chatwidget.storage import InMemoryKeyValueStore
from cvdeck.contact.partial import PartialContactInfo
from cvdeck.conversation.models import ChatTurn, TurnRole, seed_greeting


@pytest.fixture
def client() -> AsyncMock:
    mock = AsyncMock(spec=ChatAPIClient)
    mock.extract_contact.return_value = PartialContactInfo()
    mock.submit_contact.return_value = SubmitContactResult(success=True, message="Thanks")
    return mock


@pytest.fixture
def store() -> PartialContactStore:
    return PartialContactStore(InMemoryKeyValueStore())


@pytest.fixture
def reconciler(client: AsyncMock, store: PartialContactStore) -> ContactReconciler:
    return ContactReconciler(client, store)


def conversation(*user_texts: str) -> list[ChatTurn]:
    turns = [seed_greeting()]
    for text in user_texts:
        turns.append(ChatTurn(role=TurnRole.USER, content=text))
        turns.append(ChatTurn(role=TurnRole.ASSISTANT, content="Noted."))
    return turns


class TestBuildSubmissionMessage:
    def test_transcript_wins_over_stored_message(self) -> None:
        info = PartialContactInfo(name="Dana", company="Acme", message="stored")
        turns = [seed_greeting("Hi!"), ChatTurn(role=TurnRole.USER, content="Hello")]

        assert build_submission_message(info, turns) == "Assistant: Hi!\nUser: Hello"

    def test_company_then_phone_then_message(self) -> None:
        info = PartialContactInfo(company="Acme", phone="5551234567", message="Call me")

        assert build_submission_message(info) == (
            "Company: Acme\nPhone: 5551234567\nCall me"
        )

    def test_default_message(self) -> None:
        assert build_submission_message(PartialContactInfo(name="Dana")) == (
            DEFAULT_SUBMISSION_MESSAGE
        )


class TestExtract:
    @pytest.mark.asyncio
    async def test_empty_input_skips_network(
        self, reconciler: ContactReconciler, client: AsyncMock
    ) -> None:
        result = await reconciler.extract([])

        assert result.is_empty()
        client.extract_contact.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_yields_empty_record(
        self, reconciler: ContactReconciler, client: AsyncMock
    ) -> None:
        client.extract_contact.side_effect = ChatClientError("boom", status_code=500)

        result = await reconciler.extract([{"role": "user", "content": "I'm Dana"}])

        assert result.is_empty()


class TestRunPassiveCycle:
    @pytest.mark.asyncio
    async def test_sends_only_user_turns(
        self, reconciler: ContactReconciler, client: AsyncMock
    ) -> None:
        await reconciler.run_passive_cycle(conversation("I'm Dana"))

        client.extract_contact.assert_awaited_once_with([{"role": "user", "content": "I'm Dana"}])

    @pytest.mark.asyncio
    async def test_greeting_only_makes_no_request(
        self, reconciler: ContactReconciler, client: AsyncMock
    ) -> None:
        await reconciler.run_passive_cycle([seed_greeting()])
        client.extract_contact.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_merges_extracted_fields(
        self,
        reconciler: ContactReconciler,
        client: AsyncMock,
        store: PartialContactStore,
    ) -> None:
        await store.save(PartialContactInfo(name="Dana"))
        client.extract_contact.return_value = PartialContactInfo(company="Acme")

        merged = await reconciler.run_passive_cycle(conversation("I work at Acme"))

        assert merged.present_fields() == {"name": "Dana", "company": "Acme"}
        assert await store.load() == merged

    @pytest.mark.asyncio
    async def test_skipped_once_complete(
        self,
        reconciler: ContactReconciler,
        client: AsyncMock,
        store: PartialContactStore,
    ) -> None:
        await store.save(PartialContactInfo(name="Dana", email="dana@example.com"))

        await reconciler.run_passive_cycle(conversation("Actually call me"))

        client.extract_contact.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_extraction_leaves_record(
        self,
        reconciler: ContactReconciler,
        store: PartialContactStore,
    ) -> None:
        await store.save(PartialContactInfo(name="Dana"))

        result = await reconciler.run_passive_cycle(conversation("Nice weather"))

        assert result == PartialContactInfo(name="Dana")


class TestSubmit:
    @pytest.mark.asyncio
    async def test_incomplete_record_makes_no_request(
        self,
        reconciler: ContactReconciler,
        client: AsyncMock,
        store: PartialContactStore,
    ) -> None:
        await store.save(PartialContactInfo(name="Dana"))

        assert await reconciler.submit(conversation("hi")) is False
        client.submit_contact.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_payload_uses_transcript(
        self,
        reconciler: ContactReconciler,
        client: AsyncMock,
        store: PartialContactStore,
    ) -> None:
        await store.save(PartialContactInfo(name="Dana", phone="5551234567", message="stored"))
        turns = [seed_greeting("Hi!"), ChatTurn(role=TurnRole.USER, content="Call me")]

        await reconciler.submit(turns)

        client.submit_contact.assert_awaited_once_with({
            "name": "Dana",
            "company": "",
            "message": "Assistant: Hi!\nUser: Call me",
            "phone": "5551234567",
        })

    @pytest.mark.asyncio
    async def test_clears_record_on_success(
        self,
        reconciler: ContactReconciler,
        store: PartialContactStore,
    ) -> None:
        await store.save(PartialContactInfo(name="Dana", email="dana@example.com"))

        assert await reconciler.submit() is True
        assert (await store.load()).is_empty()

    @pytest.mark.asyncio
    async def test_keeps_record_when_rejected(
        self,
        reconciler: ContactReconciler,
        client: AsyncMock,
        store: PartialContactStore,
    ) -> None:
        info = PartialContactInfo(name="Dana", email="dana@example.com")
        await store.save(info)
        client.submit_contact.return_value = SubmitContactResult(success=False)

        assert await reconciler.submit() is False
        assert await store.load() == info

    @pytest.mark.asyncio
    async def test_keeps_record_on_transport_failure(
        self,
        reconciler: ContactReconciler,
        client: AsyncMock,
        store: PartialContactStore,
    ) -> None:
        info = PartialContactInfo(name="Dana", email="dana@example.com")
        await store.save(info)
        client.submit_contact.side_effect = ChatClientError("offline")

        assert await reconciler.submit() is False
        assert await store.load() == info
