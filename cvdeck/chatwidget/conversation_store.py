"""Session-scoped persistence of the chat turn sequence."""

from collections.abc import Callable, Sequence

from pydantic import TypeAdapter, ValidationError

from cvdeck.chatwidget.storage import KeyValueStore, StorageError
from cvdeck.conversation.models import DEFAULT_GREETING, ChatTurn, seed_greeting
from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)

CONVERSATION_KEY = "cvdeck-chat-messages"

_TURNS = TypeAdapter(list[ChatTurn])


class ConversationStore:
    """Ordered turn log, mirrored to a storage area on every change.

    The in-memory sequence is authoritative. Storage failures are logged
    and the conversation carries on without persistence for that write.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = CONVERSATION_KEY,
        greeting: str = DEFAULT_GREETING,
    ) -> None:
        self._storage = storage
        self._key = key
        self._greeting = greeting
        self._turns: list[ChatTurn] = [seed_greeting(greeting)]

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return tuple(self._turns)

    async def load(self) -> list[ChatTurn]:
        """Restore the persisted sequence.

        Returns the seeded greeting alone when nothing usable is stored.
        Never raises.
        """
        turns = await self._read()
        self._turns = turns or [seed_greeting(self._greeting)]
        return list(self._turns)

    async def _read(self) -> list[ChatTurn]:
        try:
            raw = await self._storage.get(self._key)
        except StorageError as e:
            logger.warning("conversation_load_failed", error=e.message)
            return []

        if not raw:
            return []

        try:
            return _TURNS.validate_json(raw)
        except ValidationError as e:
            logger.warning("conversation_corrupted", error_count=e.error_count())
            return []

    async def save(self, turns: Sequence[ChatTurn]) -> None:
        """Replace the persisted sequence. Never raises."""
        self._turns = list(turns)
        try:
            await self._storage.set(self._key, _TURNS.dump_json(self._turns).decode("utf-8"))
        except StorageError as e:
            logger.warning("conversation_save_failed", error=e.message, turns=len(self._turns))

    async def append(self, turn: ChatTurn) -> list[ChatTurn]:
        """Add a turn at the end and persist."""
        await self.save([*self._turns, turn])
        return list(self._turns)

    async def update_last(self, mutator: Callable[[ChatTurn], ChatTurn]) -> list[ChatTurn]:
        """Replace the last turn with ``mutator(last)`` and persist.

        Used for appending streamed output to the in-flight assistant turn.
        """
        if not self._turns:
            return []
        await self.save([*self._turns[:-1], mutator(self._turns[-1])])
        return list(self._turns)
