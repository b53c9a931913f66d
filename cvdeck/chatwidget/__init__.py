"""Client-side chat widget: conversation persistence and the contact reconciler."""

from cvdeck.chatwidget.client import ChatAPIClient, ChatClientError, SubmitContactResult
from cvdeck.chatwidget.contact_store import PartialContactStore
from cvdeck.chatwidget.conversation_store import ConversationStore
from cvdeck.chatwidget.reconciler import ContactReconciler, build_submission_message
from cvdeck.chatwidget.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    RedisKeyValueStore,
    StorageError,
    StorageQuotaExceededError,
)
from cvdeck.chatwidget.widget import APOLOGY_MESSAGE, ChatWidget, create_chat_widget

__all__ = [
    "APOLOGY_MESSAGE",
    "ChatAPIClient",
    "ChatClientError",
    "ChatWidget",
    "ContactReconciler",
    "ConversationStore",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "PartialContactStore",
    "RedisKeyValueStore",
    "StorageError",
    "StorageQuotaExceededError",
    "SubmitContactResult",
    "build_submission_message",
    "create_chat_widget",
]
