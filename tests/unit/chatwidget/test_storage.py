"""Unit tests for widget storage areas."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from cvdeck.chatwidget.storage import (
    InMemoryKeyValueStore,
    RedisKeyValueStore,
    StorageError,
    StorageQuotaExceededError,
)


class TestInMemoryKeyValueStore:
    @pytest.mark.asyncio
    async def test_set_get_delete(self) -> None:
        store = InMemoryKeyValueStore()

        await store.set("k", "v")
        assert await store.get("k") == "v"

        await store.delete("k")
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_delete_missing_key_is_noop(self) -> None:
        await InMemoryKeyValueStore().delete("missing")

    @pytest.mark.asyncio
    async def test_quota_counts_all_keys(self) -> None:
        store = InMemoryKeyValueStore(max_bytes=8)
        await store.set("a", "1234")

        with pytest.raises(StorageQuotaExceededError):
            await store.set("b", "12345")

        assert await store.get("b") is None

    @pytest.mark.asyncio
    async def test_quota_allows_replacing_a_value(self) -> None:
        store = InMemoryKeyValueStore(max_bytes=4)
        await store.set("a", "1234")
        await store.set("a", "abcd")
        assert await store.get("a") == "abcd"


class TestRedisKeyValueStore:
    @pytest.fixture
    def client(self) -> AsyncMock:
        return AsyncMock()

    @pytest.mark.asyncio
    async def test_prefixes_keys_and_applies_ttl(self, client: AsyncMock) -> None:
        store = RedisKeyValueStore(client, ttl_seconds=1800)

        await store.set("cvdeck-chat-messages", "[]")

        client.set.assert_awaited_once_with("cvdeck:widget:cvdeck-chat-messages", "[]", ex=1800)

    @pytest.mark.asyncio
    async def test_get_decodes_bytes(self, client: AsyncMock) -> None:
        client.get.return_value = b'{"name": "Dana"}'
        store = RedisKeyValueStore(client, key_prefix="test")

        assert await store.get("contact") == '{"name": "Dana"}'
        client.get.assert_awaited_once_with("test:contact")

    @pytest.mark.asyncio
    async def test_wraps_redis_errors(self, client: AsyncMock) -> None:
        client.get.side_effect = RedisConnectionError("down")
        store = RedisKeyValueStore(client)

        with pytest.raises(StorageError) as exc_info:
            await store.get("k")

        assert isinstance(exc_info.value.cause, RedisConnectionError)
