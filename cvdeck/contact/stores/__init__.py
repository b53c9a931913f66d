"""Contact submission stores."""

from cvdeck.contact.store import ContactStore
from cvdeck.contact.stores.inmemory import InMemoryContactStore
from cvdeck.contact.stores.postgres import PostgresContactStore

__all__ = [
    "ContactStore",
    "InMemoryContactStore",
    "PostgresContactStore",
]
