"""Chat request and response models."""

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One message as sent by the widget."""

    role: str = Field(min_length=1)
    """user, assistant or system."""

    content: str
    """Message text."""


class ChatRequest(BaseModel):
    """Request body for POST /api/chat."""

    messages: list[ChatMessage]
    """The conversation so far, oldest first."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "messages": [
                    {"role": "assistant", "content": "Hi 👋, You can ask me anything!"},
                    {"role": "user", "content": "What do you work on?"},
                ]
            }
        }
    )


class ExtractContactResponse(BaseModel):
    """Response body for POST /api/chat/extract-contact.

    Only fields that were extracted are present.
    """

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    message: str | None = None
