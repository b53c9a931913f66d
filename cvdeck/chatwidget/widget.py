"""Chat widget controller.

Drives one visitor conversation: sends messages, streams replies into
the conversation store, runs passive contact extraction after every
exchange and submits the contact record on page lifecycle signals.
"""

import asyncio
from contextlib import aclosing

import httpx
import redis.asyncio as redis

from cvdeck.chatwidget.client import ChatAPIClient, ChatClientError
from cvdeck.chatwidget.contact_store import PartialContactStore
from cvdeck.chatwidget.conversation_store import ConversationStore
from cvdeck.chatwidget.reconciler import ContactReconciler
from cvdeck.chatwidget.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    RedisKeyValueStore,
)
from cvdeck.config.settings import Settings
from cvdeck.conversation.models import ChatTurn, TurnRole
from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)

APOLOGY_MESSAGE = "Sorry, I am all out of tokens. 🤷🏻‍♂️"


class ChatWidget:
    """One chat session.

    ``is_generating`` guards against overlapping sends. Lifecycle signals
    are ignored until ``start()`` and after ``detach()``.
    """

    def __init__(
        self,
        client: ChatAPIClient,
        conversation: ConversationStore,
        reconciler: ContactReconciler,
    ) -> None:
        self._client = client
        self._conversation = conversation
        self._reconciler = reconciler
        self._is_generating = False
        self._attached = False
        self._generation = 0
        self._passive_tasks: set[asyncio.Task] = set()

    @property
    def is_generating(self) -> bool:
        return self._is_generating

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return self._conversation.turns

    @property
    def reconciler(self) -> ContactReconciler:
        return self._reconciler

    async def start(self) -> list[ChatTurn]:
        """Restore the conversation and start reacting to lifecycle signals."""
        turns = await self._conversation.load()
        self._attached = True
        logger.debug("chat_widget_started", turns=len(turns))
        return turns

    async def send_message(self, text: str) -> None:
        """Send a visitor message and stream the reply.

        Blank input and input arriving while a reply is streaming are
        ignored. A failed completion appends an apology turn instead of
        raising.
        """
        content = text.strip()
        if not content or self._is_generating:
            return

        self._generation += 1
        generation = self._generation
        self._is_generating = True

        turns = await self._conversation.append(ChatTurn(role=TurnRole.USER, content=content))
        messages = [{"role": t.role.value, "content": t.content} for t in turns]

        try:
            async with self._client.open_completion(messages) as chunks:
                # The reply turn exists, empty, as soon as the API accepts the request
                if self._is_current(generation):
                    await self._conversation.append(ChatTurn(role=TurnRole.ASSISTANT))
                async with aclosing(chunks) as stream:
                    async for chunk in stream:
                        if not self._is_current(generation):
                            break
                        await self._conversation.update_last(
                            lambda turn, chunk=chunk: turn.with_appended(chunk)
                        )
        except ChatClientError as e:
            logger.warning("chat_completion_failed", error=e.message, status_code=e.status_code)
            await self._conversation.append(
                ChatTurn(role=TurnRole.ASSISTANT, content=APOLOGY_MESSAGE)
            )
        finally:
            if self._generation == generation:
                self._is_generating = False

        self._schedule_passive_cycle()

    def stop(self) -> None:
        """Stop writing streamed output. The request itself is not aborted."""
        self._is_generating = False

    def _is_current(self, generation: int) -> bool:
        return self._is_generating and self._generation == generation

    def _schedule_passive_cycle(self) -> None:
        task = asyncio.create_task(self._reconciler.run_passive_cycle(self.turns))
        self._passive_tasks.add(task)
        task.add_done_callback(self._passive_tasks.discard)

    async def on_visibility_change(self, hidden: bool) -> None:
        if self._attached and hidden:
            await self._reconciler.submit(self.turns)

    async def on_before_unload(self) -> None:
        if self._attached:
            await self._reconciler.submit(self.turns)

    def detach(self) -> None:
        """Stop reacting to lifecycle signals. In-flight work keeps running."""
        self._attached = False

    async def wait_idle(self) -> None:
        """Wait for outstanding passive extraction cycles."""
        while self._passive_tasks:
            await asyncio.gather(*list(self._passive_tasks), return_exceptions=True)

    async def aclose(self) -> None:
        self.detach()
        await self.wait_idle()
        await self._client.close()


def create_chat_widget(
    settings: Settings,
    *,
    session_id: str,
    visitor_id: str,
    session_storage: KeyValueStore | None = None,
    contact_storage: KeyValueStore | None = None,
    redis_client: redis.Redis | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatWidget:
    """Wire a ChatWidget for one browser session of one visitor.

    On redis the conversation lives under
    ``{redis_key_prefix}:session:{session_id}`` with the session TTL and
    the partial contact record under ``{redis_key_prefix}:visitor:{visitor_id}``
    without expiry, so widgets sharing a client never see each other's
    data. Without a redis client each widget gets its own in-memory areas.
    """
    if not session_id.strip() or not visitor_id.strip():
        raise ValueError("session_id and visitor_id must be non-empty")

    widget_config = settings.widget

    if redis_client is not None:
        prefix = widget_config.redis_key_prefix
        session_storage = session_storage or RedisKeyValueStore(
            redis_client,
            ttl_seconds=widget_config.session_ttl_seconds,
            key_prefix=f"{prefix}:session:{session_id}",
        )
        contact_storage = contact_storage or RedisKeyValueStore(
            redis_client,
            key_prefix=f"{prefix}:visitor:{visitor_id}",
        )

    client = ChatAPIClient(
        base_url=widget_config.api_base_url,
        timeout=widget_config.request_timeout,
        transport=transport,
    )
    conversation = ConversationStore(
        session_storage or InMemoryKeyValueStore(),
        key=widget_config.conversation_key,
        greeting=widget_config.greeting,
    )
    contacts = PartialContactStore(
        contact_storage or InMemoryKeyValueStore(),
        key=widget_config.contact_key,
    )
    return ChatWidget(client, conversation, ContactReconciler(client, contacts))
