"""Profile endpoint."""

from fastapi import APIRouter

from cvdeck.api.dependencies import ProfileServiceDep
from cvdeck.profile.models import ProfileData

router = APIRouter()


@router.get("/profile", response_model=ProfileData)
async def get_profile(profile_service: ProfileServiceDep) -> ProfileData:
    """Return the profile, skills, work experience and education."""
    return await profile_service.get_profile_data()
