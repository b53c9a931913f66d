"""Profile stores."""

from cvdeck.profile.store import ProfileStore
from cvdeck.profile.stores.inmemory import InMemoryProfileStore
from cvdeck.profile.stores.postgres import PostgresProfileStore

__all__ = ["ProfileStore", "InMemoryProfileStore", "PostgresProfileStore"]
