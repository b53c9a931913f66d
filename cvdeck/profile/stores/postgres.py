"""PostgreSQL implementation of ProfileStore.

Tables: profile, skills, work_experience, education
"""

import json
from typing import Any

import asyncpg

from cvdeck.db.errors import DatabaseError
from cvdeck.db.pool import PostgresPool
from cvdeck.observability.logging import get_logger
from cvdeck.profile.models import Education, Profile, Skill, WorkExperience
from cvdeck.profile.store import ProfileStore

logger = get_logger(__name__)


def parse_bio(value: Any) -> list[str]:
    """Coerce a bio column into a list of paragraphs.

    The column is JSONB, but older rows hold a JSON-encoded string.
    Anything that does not decode to a list becomes [].
    """
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return []
        if isinstance(parsed, list):
            return [str(item) for item in parsed]
    return []


class PostgresProfileStore(ProfileStore):
    """PostgreSQL-backed ProfileStore using asyncpg."""

    def __init__(self, pool: PostgresPool) -> None:
        self._pool = pool

    async def _fetch(self, query: str, what: str) -> list[Any]:
        try:
            async with self._pool.acquire() as conn:
                return await conn.fetch(query)
        except (OSError, asyncpg.PostgresError) as e:
            logger.error("profile_fetch_error", table=what, error=str(e))
            raise DatabaseError(f"Failed to fetch {what}", cause=e) from e

    async def get_profile(self) -> Profile | None:
        rows = await self._fetch(
            """
            SELECT id, name, title, bio, profile_image_url, created_at, updated_at
            FROM profile
            LIMIT 1
            """,
            "profile",
        )
        if not rows:
            return None

        row = rows[0]
        return Profile(
            id=row["id"],
            name=row["name"],
            title=row["title"],
            bio=parse_bio(row["bio"]),
            profile_image_url=row["profile_image_url"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    async def get_skills(self) -> list[Skill]:
        rows = await self._fetch(
            """
            SELECT id, name, category, "order", created_at
            FROM skills
            ORDER BY "order" ASC
            """,
            "skills",
        )
        return [Skill(**dict(row)) for row in rows]

    async def get_work_experience(self) -> list[WorkExperience]:
        rows = await self._fetch(
            """
            SELECT id, company_name, company_logo_url, position, description,
                   start_date, end_date, is_current, "order", created_at
            FROM work_experience
            ORDER BY "order" ASC
            """,
            "work experience",
        )
        return [WorkExperience(**dict(row)) for row in rows]

    async def get_education(self) -> list[Education]:
        rows = await self._fetch(
            """
            SELECT id, institution_name, institution_logo_url, degree, field,
                   description, start_date, end_date, "order", created_at
            FROM education
            ORDER BY "order" ASC
            """,
            "education",
        )
        return [Education(**dict(row)) for row in rows]
