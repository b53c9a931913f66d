"""Contact submission models."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, EmailStr, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class ContactDraft(BaseModel):
    """Unsanitized contact data handed to the contact service."""

    name: str
    email: str
    message: str


class ContactFormData(ContactDraft):
    """Payload of the public contact form."""

    name: str = Field(
        ...,
        min_length=2,
        max_length=100,
        description="Sender name",
    )
    email: EmailStr = Field(..., description="Sender email address")
    message: str = Field(
        ...,
        min_length=10,
        max_length=1000,
        description="Message body",
    )


class SanitizedContactData(BaseModel):
    """Contact data after trimming, escaping and email normalization."""

    name: str
    email: str
    message: str


class ContactSubmission(BaseModel):
    """A persisted contact submission."""

    id: UUID = Field(default_factory=uuid4, description="Unique identifier")
    name: str = Field(..., description="Sanitized sender name")
    email: str = Field(..., description="Normalized sender email")
    message: str = Field(..., description="Sanitized message body")
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")


class ContactSubmissionResult(ContactSubmission):
    """Outcome of ContactService.create_contact_submission."""

    email_sent: bool = Field(default=False, description="Notification email delivered")
