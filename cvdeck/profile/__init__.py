"""CV profile content."""

from cvdeck.profile.models import (
    Education,
    Profile,
    ProfileData,
    Skill,
    WorkExperience,
)
from cvdeck.profile.service import ProfileService
from cvdeck.profile.store import ProfileStore

__all__ = [
    "Education",
    "Profile",
    "ProfileData",
    "ProfileService",
    "ProfileStore",
    "Skill",
    "WorkExperience",
]
