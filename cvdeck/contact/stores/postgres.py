"""PostgreSQL implementation of ContactStore."""

from typing import Any

import asyncpg

from cvdeck.contact.models import ContactSubmission, SanitizedContactData
from cvdeck.contact.store import ContactStore
from cvdeck.db.errors import DatabaseError
from cvdeck.db.pool import PostgresPool
from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)


class PostgresContactStore(ContactStore):
    """Stores submissions in the ``contact_submissions`` table."""

    def __init__(self, pool: PostgresPool) -> None:
        self._pool = pool

    def _row_to_submission(self, row: Any) -> ContactSubmission:
        return ContactSubmission(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            message=row["message"],
            created_at=row["created_at"],
        )

    async def insert_submission(self, data: SanitizedContactData) -> ContactSubmission:
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """
                    INSERT INTO contact_submissions (id, name, email, message)
                    VALUES (gen_random_uuid(), $1, $2, $3)
                    RETURNING id, name, email, message, created_at
                    """,
                    data.name,
                    data.email,
                    data.message,
                )
        except (OSError, asyncpg.PostgresError) as e:
            logger.error("contact_insert_error", error=str(e))
            raise DatabaseError(
                "Failed to insert contact submission", cause=e
            ) from e

        if row is None:
            raise DatabaseError("Failed to create contact submission")

        submission = self._row_to_submission(row)
        logger.debug("contact_submission_inserted", submission_id=str(submission.id))
        return submission

    async def list_submissions(self, *, limit: int = 100) -> list[ContactSubmission]:
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    """
                    SELECT id, name, email, message, created_at
                    FROM contact_submissions
                    ORDER BY created_at DESC
                    LIMIT $1
                    """,
                    limit,
                )
        except (OSError, asyncpg.PostgresError) as e:
            logger.error("contact_list_error", error=str(e))
            raise DatabaseError("Failed to list contact submissions", cause=e) from e

        return [self._row_to_submission(row) for row in rows]
