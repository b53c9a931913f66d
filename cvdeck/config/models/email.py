"""Email notification configuration models."""

from pydantic import BaseModel, Field, SecretStr


class EmailSettings(BaseModel):
    """Resend notification settings.

    Notifications are disabled unless the API key and both addresses are set.
    """

    api_key: SecretStr | None = Field(
        default=None,
        description="Resend API key (prefer RESEND_API_KEY env var)",
    )
    from_address: str | None = Field(default=None, description="Sender address")
    to_address: str | None = Field(default=None, description="Recipient address")
    api_url: str = Field(
        default="https://api.resend.com",
        description="Resend API base URL",
    )
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
