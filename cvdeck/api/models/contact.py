"""Contact request and response models."""

from pydantic import BaseModel, ConfigDict, Field


class ContactResponse(BaseModel):
    """Response body for POST /api/contact."""

    success: bool = True
    message: str


class ChatContactRequest(BaseModel):
    """Request body for POST /api/chat/submit-contact.

    Every field is optional at the schema level. The route reports which
    required ones are missing.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Dana Levi",
                "email": "dana@example.com",
                "company": "Acme",
                "message": "User: Hi\nAssistant: Hello!",
            }
        }
    )

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    message: str | None = None


class MissingFields(BaseModel):
    name: bool
    email: bool
    phone: bool


class MissingFieldsResponse(BaseModel):
    """400 body when name or both of email and phone are missing."""

    success: bool = False
    message: str
    code: str = "MISSING_FIELDS"
    missing_fields: MissingFields


class ChatContactResponse(BaseModel):
    """Response body for POST /api/chat/submit-contact."""

    success: bool = True
    message: str
    email_sent: bool = Field(default=False, description="Notification email delivered")
