"""Database access: connection pool, store errors and migrations."""

from cvdeck.db.errors import ConnectionError, DatabaseError, StoreError
from cvdeck.db.pool import PostgresPool

__all__ = ["PostgresPool", "StoreError", "DatabaseError", "ConnectionError"]
