"""Profile data service."""

import asyncio

from cvdeck.db.errors import DatabaseError, StoreError
from cvdeck.observability.logging import get_logger
from cvdeck.profile.models import ProfileData
from cvdeck.profile.store import ProfileStore

logger = get_logger(__name__)


class ProfileService:
    """Assembles the full profile from the store."""

    def __init__(self, store: ProfileStore) -> None:
        self._store = store

    async def get_profile_data(self) -> ProfileData:
        """Fetch profile, skills, work experience and education concurrently.

        Raises:
            DatabaseError: If any of the reads fails
        """
        try:
            profile, skills, work_experience, education = await asyncio.gather(
                self._store.get_profile(),
                self._store.get_skills(),
                self._store.get_work_experience(),
                self._store.get_education(),
            )
        except DatabaseError:
            raise
        except StoreError as e:
            raise DatabaseError("Failed to fetch profile data", cause=e) from e

        logger.debug(
            "profile_data_loaded",
            has_profile=profile is not None,
            skills=len(skills),
            work_experience=len(work_experience),
            education=len(education),
        )

        return ProfileData(
            profile=profile,
            skills=skills,
            work_experience=work_experience,
            education=education,
        )
