"""In-memory implementation of ProfileStore."""

from cvdeck.profile.models import Education, Profile, Skill, WorkExperience
from cvdeck.profile.store import ProfileStore


class InMemoryProfileStore(ProfileStore):
    """In-memory ProfileStore for testing and development.

    Not suitable for production use.
    """

    def __init__(
        self,
        profile: Profile | None = None,
        skills: list[Skill] | None = None,
        work_experience: list[WorkExperience] | None = None,
        education: list[Education] | None = None,
    ) -> None:
        self._profile = profile
        self._skills = list(skills or [])
        self._work_experience = list(work_experience or [])
        self._education = list(education or [])

    def set_profile(self, profile: Profile | None) -> None:
        self._profile = profile

    def add_skill(self, skill: Skill) -> None:
        self._skills.append(skill)

    def add_work_experience(self, work: WorkExperience) -> None:
        self._work_experience.append(work)

    def add_education(self, education: Education) -> None:
        self._education.append(education)

    async def get_profile(self) -> Profile | None:
        return self._profile

    async def get_skills(self) -> list[Skill]:
        return sorted(self._skills, key=lambda s: s.order)

    async def get_work_experience(self) -> list[WorkExperience]:
        return sorted(self._work_experience, key=lambda w: w.order)

    async def get_education(self) -> list[Education]:
        return sorted(self._education, key=lambda e: e.order)
