"""ProfileStore abstract interface."""

from abc import ABC, abstractmethod

from cvdeck.profile.models import Education, Profile, Skill, WorkExperience


class ProfileStore(ABC):
    """Read access to CV content.

    List reads return entries sorted by their ``order`` field.
    """

    @abstractmethod
    async def get_profile(self) -> Profile | None:
        """Get the profile, or None when none is stored."""
        pass

    @abstractmethod
    async def get_skills(self) -> list[Skill]:
        pass

    @abstractmethod
    async def get_work_experience(self) -> list[WorkExperience]:
        pass

    @abstractmethod
    async def get_education(self) -> list[Education]:
        pass
