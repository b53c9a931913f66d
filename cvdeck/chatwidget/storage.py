"""Key-value storage areas used by the chat widget.

The widget keeps two slots: the conversation, scoped to one session,
and the partial contact record, which outlives the session. Both are
plain string values under a string key.
"""

from abc import ABC, abstractmethod

import redis.asyncio as redis
from redis.exceptions import RedisError


class StorageError(Exception):
    """Raised when a storage area cannot be read or written."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class StorageQuotaExceededError(StorageError):
    """Raised when a write would exceed the area's quota."""

    pass


class KeyValueStore(ABC):
    """Abstract string key-value area."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is unset.

        Raises:
            StorageError: If the backend fails
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one.

        Raises:
            StorageQuotaExceededError: If the value does not fit
            StorageError: If the backend fails
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Removing an unset key is not an error."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local storage area.

    ``max_bytes`` caps the total UTF-8 size of all values, like a
    browser storage quota.
    """

    def __init__(self, max_bytes: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self._max_bytes = max_bytes

    def _size_without(self, key: str) -> int:
        return sum(len(v.encode("utf-8")) for k, v in self._data.items() if k != key)

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        if self._max_bytes is not None:
            needed = self._size_without(key) + len(value.encode("utf-8"))
            if needed > self._max_bytes:
                raise StorageQuotaExceededError(
                    f"Storage quota of {self._max_bytes} bytes exceeded"
                )
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class RedisKeyValueStore(KeyValueStore):
    """Redis-backed storage area.

    With ``ttl_seconds`` every write refreshes the key's expiry, which
    models a session-scoped area. Without it keys persist.

    Key structure:
    - {key_prefix}:{key}
    """

    def __init__(
        self,
        client: redis.Redis,
        ttl_seconds: int | None = None,
        key_prefix: str = "cvdeck:widget",
    ) -> None:
        """Initialize the store.

        Args:
            client: Redis client created with ``decode_responses=True``
            ttl_seconds: Expiry applied on every write, None for no expiry
            key_prefix: Namespace for keys
        """
        self._client = client
        self._ttl = ttl_seconds
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(self._key(key))
        except RedisError as e:
            raise StorageError(f"Failed to read {key}", cause=e) from e
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await self._client.set(self._key(key), value, ex=self._ttl)
        except RedisError as e:
            raise StorageError(f"Failed to write {key}", cause=e) from e

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(self._key(key))
        except RedisError as e:
            raise StorageError(f"Failed to delete {key}", cause=e) from e
