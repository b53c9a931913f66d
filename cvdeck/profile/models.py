"""Profile domain models.

The CV content shown on the deck and fed into the persona prompt.
"""

from datetime import date, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from cvdeck.contact.models import utc_now


class Profile(BaseModel):
    """The owner's headline profile."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    title: str
    bio: list[str] = Field(default_factory=list, description="Bio paragraphs")
    profile_image_url: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Skill(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    category: str | None = None
    order: int = 0
    created_at: datetime = Field(default_factory=utc_now)


class WorkExperience(BaseModel):
    """One position held."""

    id: UUID = Field(default_factory=uuid4)
    company_name: str
    company_logo_url: str | None = None
    position: str
    description: str | None = None
    start_date: date
    end_date: date | None = None
    is_current: bool = False
    order: int = 0
    created_at: datetime = Field(default_factory=utc_now)


class Education(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    institution_name: str
    institution_logo_url: str | None = None
    degree: str
    field: str | None = None
    description: str | None = None
    start_date: date
    end_date: date | None = None
    order: int = 0
    created_at: datetime = Field(default_factory=utc_now)


class ProfileData(BaseModel):
    """Everything the deck renders, in display order."""

    profile: Profile | None = None
    skills: list[Skill] = Field(default_factory=list)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
