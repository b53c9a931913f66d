"""Unit tests for PartialContactStore."""

import json

import pytest

from cvdeck.chatwidget.contact_store import CONTACT_KEY, PartialContactStore
from cvdeck.chatwidget.storage import InMemoryKeyValueStore
from cvdeck.contact.partial import PartialContactInfo


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def store(storage: InMemoryKeyValueStore) -> PartialContactStore:
    return PartialContactStore(storage)


class TestPartialContactStore:
    @pytest.mark.asyncio
    async def test_load_missing_is_empty(self, store: PartialContactStore) -> None:
        assert (await store.load()).is_empty()

    @pytest.mark.asyncio
    async def test_load_corrupted_is_empty(
        self, storage: InMemoryKeyValueStore, store: PartialContactStore
    ) -> None:
        await storage.set(CONTACT_KEY, "{broken")
        assert (await store.load()).is_empty()

    @pytest.mark.asyncio
    async def test_save_omits_absent_fields(
        self, storage: InMemoryKeyValueStore, store: PartialContactStore
    ) -> None:
        await store.save(PartialContactInfo(name="Dana", company=""))

        assert json.loads(await storage.get(CONTACT_KEY)) == {"name": "Dana"}

    @pytest.mark.asyncio
    async def test_merge_accumulates_across_calls(self, store: PartialContactStore) -> None:
        await store.merge(PartialContactInfo(name="Dana"))
        merged = await store.merge(PartialContactInfo(email="dana@example.com"))

        assert merged.present_fields() == {"name": "Dana", "email": "dana@example.com"}
        assert await store.load() == merged

    @pytest.mark.asyncio
    async def test_clear(self, store: PartialContactStore) -> None:
        await store.save(PartialContactInfo(name="Dana"))
        await store.clear()
        assert (await store.load()).is_empty()
