"""Unit tests for ChatWidget."""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import pytest

from cvdeck.chatwidget.contact_store import PartialContactStore
from cvdeck.chatwidget.conversation_store import ConversationStore
from cvdeck.chatwidget.storage import InMemoryKeyValueStore
from cvdeck.chatwidget.widget import APOLOGY_MESSAGE, ChatWidget, create_chat_widget
from cvdeck.config.settings import Settings
from cvdeck.contact.partial import PartialContactInfo
from cvdeck.conversation.models import GREETING_TURN_ID, TurnRole


class FakeChatAPI:
    """Records requests and answers like the CV deck API."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, dict]] = []
        self.reply = "Hello Dana"
        self.chat_status = 200
        self.extracted: dict = {}
        self.submit_response: dict = {"success": True, "message": "Thanks"}

    def paths(self) -> list[str]:
        return [path for path, _ in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else {}
        self.requests.append((request.url.path, body))

        if request.url.path == "/api/chat":
            if self.chat_status != 200:
                return httpx.Response(self.chat_status, json={"success": False})
            return httpx.Response(200, text=self.reply)
        if request.url.path == "/api/chat/extract-contact":
            return httpx.Response(200, json=self.extracted)
        if request.url.path == "/api/chat/submit-contact":
            return httpx.Response(200, json=self.submit_response)
        return httpx.Response(404)


@pytest.fixture
def api() -> FakeChatAPI:
    return FakeChatAPI()


@pytest.fixture
def contact_storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def contacts(contact_storage: InMemoryKeyValueStore) -> PartialContactStore:
    return PartialContactStore(contact_storage)


@pytest.fixture
async def widget(
    api: FakeChatAPI, contact_storage: InMemoryKeyValueStore
) -> AsyncIterator[ChatWidget]:
    widget = create_chat_widget(
        Settings(),
        session_id="tab-1",
        visitor_id="visitor-1",
        session_storage=InMemoryKeyValueStore(),
        contact_storage=contact_storage,
        transport=httpx.MockTransport(api),
    )
    await widget.start()
    yield widget
    await widget.aclose()


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_streams_reply_into_conversation(
        self, widget: ChatWidget, api: FakeChatAPI
    ) -> None:
        await widget.send_message("  Hi, I'm Dana  ")

        turns = widget.turns
        assert [t.role for t in turns] == [TurnRole.ASSISTANT, TurnRole.USER, TurnRole.ASSISTANT]
        assert turns[1].content == "Hi, I'm Dana"
        assert turns[2].content == "Hello Dana"
        assert widget.is_generating is False

        path, body = api.requests[0]
        assert path == "/api/chat"
        assert [m["role"] for m in body["messages"]] == ["assistant", "user"]

    @pytest.mark.asyncio
    async def test_blank_input_is_ignored(self, widget: ChatWidget, api: FakeChatAPI) -> None:
        await widget.send_message("   ")

        assert api.requests == []
        assert [t.id for t in widget.turns] == [GREETING_TURN_ID]

    @pytest.mark.asyncio
    async def test_failed_completion_appends_apology(
        self, widget: ChatWidget, api: FakeChatAPI
    ) -> None:
        api.chat_status = 502

        await widget.send_message("Hello?")

        assert widget.turns[-1].content == APOLOGY_MESSAGE
        assert widget.turns[-1].role is TurnRole.ASSISTANT
        assert widget.is_generating is False

    @pytest.mark.asyncio
    async def test_passive_cycle_merges_contact(
        self,
        widget: ChatWidget,
        api: FakeChatAPI,
        contacts: PartialContactStore,
    ) -> None:
        api.extracted = {"name": "Dana", "company": "Acme"}

        await widget.send_message("I'm Dana from Acme")
        await widget.wait_idle()

        assert await contacts.load() == PartialContactInfo(name="Dana", company="Acme")
        _, body = api.requests[-1]
        assert body == {"messages": [{"role": "user", "content": "I'm Dana from Acme"}]}


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_hidden_page_submits_complete_record(
        self,
        widget: ChatWidget,
        api: FakeChatAPI,
        contacts: PartialContactStore,
    ) -> None:
        await contacts.save(PartialContactInfo(name="Dana", email="dana@example.com"))

        await widget.on_visibility_change(hidden=True)

        assert api.paths() == ["/api/chat/submit-contact"]
        assert (await contacts.load()).is_empty()

    @pytest.mark.asyncio
    async def test_visible_page_does_nothing(
        self,
        widget: ChatWidget,
        api: FakeChatAPI,
        contacts: PartialContactStore,
    ) -> None:
        await contacts.save(PartialContactInfo(name="Dana", email="dana@example.com"))

        await widget.on_visibility_change(hidden=False)

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_detached_widget_ignores_unload(
        self,
        widget: ChatWidget,
        api: FakeChatAPI,
        contacts: PartialContactStore,
    ) -> None:
        await contacts.save(PartialContactInfo(name="Dana", email="dana@example.com"))
        widget.detach()

        await widget.on_before_unload()

        assert api.requests == []
        assert not (await contacts.load()).is_empty()

    @pytest.mark.asyncio
    async def test_unload_submits_transcript(
        self,
        widget: ChatWidget,
        api: FakeChatAPI,
        contacts: PartialContactStore,
    ) -> None:
        await widget.send_message("Reach me at dana@example.com")
        await widget.wait_idle()
        await contacts.save(PartialContactInfo(name="Dana", email="dana@example.com"))

        await widget.on_before_unload()

        path, body = api.requests[-1]
        assert path == "/api/chat/submit-contact"
        assert body["message"].splitlines()[1] == "User: Reach me at dana@example.com"


class StoppingClient:
    """Client that calls ``stop()`` on the widget at a chosen point of the stream."""

    def __init__(self, chunks: list[str], stop_after: int) -> None:
        self.widget: ChatWidget | None = None
        self._chunks = chunks
        self._stop_after = stop_after

    @asynccontextmanager
    async def open_completion(self, messages):
        yield self._stream()

    async def _stream(self):
        for i, chunk in enumerate(self._chunks):
            if i == self._stop_after:
                self.widget.stop()
            yield chunk

    async def close(self) -> None:
        pass


def stoppable(widget: ChatWidget, client: StoppingClient) -> ChatWidget:
    stopped = ChatWidget(client, ConversationStore(InMemoryKeyValueStore()), widget.reconciler)
    client.widget = stopped
    return stopped


class TestStop:
    @pytest.mark.asyncio
    async def test_stop_discards_remaining_chunks(self, widget: ChatWidget) -> None:
        stopped = stoppable(widget, StoppingClient(["first", "second"], stop_after=1))

        await stopped.send_message("Tell me everything")
        await stopped.wait_idle()

        assert stopped.turns[-1].content == "first"
        assert stopped.is_generating is False

    @pytest.mark.asyncio
    async def test_stop_before_first_chunk_keeps_empty_reply(self, widget: ChatWidget) -> None:
        stopped = stoppable(widget, StoppingClient(["late"], stop_after=0))

        await stopped.send_message("Hello")
        await stopped.wait_idle()

        assert [t.role for t in stopped.turns[-2:]] == [TurnRole.USER, TurnRole.ASSISTANT]
        assert stopped.turns[-1].content == ""


class TestEmptyReply:
    @pytest.mark.asyncio
    async def test_accepted_empty_stream_leaves_empty_assistant_turn(
        self, widget: ChatWidget, api: FakeChatAPI
    ) -> None:
        api.reply = ""

        await widget.send_message("Anyone there?")

        assert widget.turns[-1].role is TurnRole.ASSISTANT
        assert widget.turns[-1].content == ""


class FakeRedis:
    """Dict-backed stand-in for ``redis.asyncio.Redis`` with decoded responses."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.expiry: dict[str, int | None] = {}

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> None:
        self.data[key] = value
        self.expiry[key] = ex

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


class TestRedisScoping:
    def build(self, redis_client: FakeRedis, api: FakeChatAPI, session: str, visitor: str) -> ChatWidget:
        return create_chat_widget(
            Settings(),
            session_id=session,
            visitor_id=visitor,
            redis_client=redis_client,
            transport=httpx.MockTransport(api),
        )

    @pytest.mark.asyncio
    async def test_sessions_on_one_client_are_isolated(self, api: FakeChatAPI) -> None:
        redis_client = FakeRedis()
        first = self.build(redis_client, api, "tab-a", "visitor-a")
        await first.start()
        await first.send_message("I am visitor A, a@x.com")
        await first.aclose()

        second = self.build(redis_client, api, "tab-b", "visitor-b")
        turns = await second.start()
        await second.aclose()

        assert [t.id for t in turns] == [GREETING_TURN_ID]

    @pytest.mark.asyncio
    async def test_key_layout(self, api: FakeChatAPI) -> None:
        redis_client = FakeRedis()
        api.extracted = {"name": "Dana"}
        widget = self.build(redis_client, api, "tab-a", "visitor-a")
        await widget.start()
        await widget.send_message("I'm Dana")
        await widget.wait_idle()
        await widget.aclose()

        session_key = "cvdeck:widget:session:tab-a:cvdeck-chat-messages"
        contact_key = "cvdeck:widget:visitor:visitor-a:cvdeck-contact-info"
        assert set(redis_client.data) == {session_key, contact_key}
        assert redis_client.expiry[session_key] == 1800
        assert redis_client.expiry[contact_key] is None

    def test_ids_are_required(self) -> None:
        with pytest.raises(ValueError):
            create_chat_widget(Settings(), session_id=" ", visitor_id="visitor-a")
