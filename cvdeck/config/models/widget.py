"""Chat widget configuration models."""

from pydantic import BaseModel, Field

from cvdeck.conversation.models import DEFAULT_GREETING


class WidgetConfig(BaseModel):
    """Settings for the client-side chat widget library."""

    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the CV deck API",
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="HTTP timeout for widget requests (seconds)",
    )
    greeting: str = Field(default=DEFAULT_GREETING, description="Seeded greeting text")
    conversation_key: str = Field(
        default="cvdeck-chat-messages",
        description="Session-scoped key holding the turn sequence",
    )
    contact_key: str = Field(
        default="cvdeck-contact-info",
        description="Longer-lived key holding the partial contact record",
    )
    redis_key_prefix: str = Field(
        default="cvdeck:widget",
        description="Namespace for widget keys; session and visitor ids are appended",
    )
    session_ttl_seconds: int = Field(
        default=1800,
        gt=0,
        description="Lifetime of the session-scoped area on redis",
    )
