"""Contact notification emails sent through the Resend HTTP API."""

import os
from dataclasses import dataclass

import httpx

from cvdeck.config.settings import Settings
from cvdeck.contact.models import SanitizedContactData
from cvdeck.contact.sanitize import sanitize_html
from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)


class EmailError(Exception):
    """Raised when a notification email cannot be sent.

    The submission that triggered it has already been saved.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


@dataclass(frozen=True)
class EmailConfig:
    """Resolved Resend credentials and addresses."""

    api_key: str
    from_address: str
    to_address: str
    api_url: str = "https://api.resend.com"
    timeout: float = 10.0


def get_email_config(settings: Settings) -> EmailConfig | None:
    """Resolve email configuration from settings and the environment.

    Returns:
        EmailConfig, or None when any of key, sender or recipient is missing
    """
    email = settings.email
    api_key = (
        email.api_key.get_secret_value() if email.api_key else None
    ) or os.environ.get("RESEND_API_KEY")
    from_address = email.from_address or os.environ.get("RESEND_FROM_EMAIL")
    to_address = email.to_address or os.environ.get("RESEND_TO_EMAIL")

    if not (api_key and from_address and to_address):
        return None

    return EmailConfig(
        api_key=api_key,
        from_address=from_address,
        to_address=to_address,
        api_url=email.api_url,
        timeout=email.timeout,
    )


def build_notification(data: SanitizedContactData, config: EmailConfig) -> dict:
    """Build the Resend request payload for a submission."""
    # Name and message arrive escaped; the normalized address does not
    message_html = data.message.replace("\n", "<br>")
    html = (
        "<h2>New contact form submission</h2>"
        f"<p><strong>Name:</strong> {data.name}</p>"
        f"<p><strong>Email:</strong> {sanitize_html(data.email)}</p>"
        f"<p><strong>Message:</strong></p><p>{message_html}</p>"
    )
    text = (
        "New contact form submission\n\n"
        f"Name: {data.name}\n"
        f"Email: {data.email}\n\n"
        f"Message:\n{data.message}\n"
    )
    return {
        "from": config.from_address,
        "to": [config.to_address],
        "reply_to": data.email,
        "subject": f"New contact form submission from {data.name}",
        "html": html,
        "text": text,
    }


class ResendEmailNotifier:
    """Sends contact notifications via ``POST {api_url}/emails``."""

    def __init__(
        self,
        config: EmailConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client or httpx.AsyncClient(
            base_url=config.api_url,
            timeout=config.timeout,
        )
        self._owns_client = client is None

    async def send_contact_notification(self, data: SanitizedContactData) -> str | None:
        """Send the notification email.

        Returns:
            The Resend email id, when the API returns one

        Raises:
            EmailError: On transport failure or a non-2xx response
        """
        payload = build_notification(data, self._config)
        try:
            response = await self._client.post(
                "/emails",
                json=payload,
                headers={"Authorization": f"Bearer {self._config.api_key}"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "notification_email_rejected",
                status_code=e.response.status_code,
            )
            raise EmailError("Failed to send notification email", cause=e) from e
        except httpx.HTTPError as e:
            logger.error("notification_email_failed", error=str(e))
            raise EmailError("Failed to send notification email", cause=e) from e

        email_id = _email_id(response)
        logger.info("notification_email_sent", email_id=email_id)
        return email_id

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _email_id(response: httpx.Response) -> str | None:
    """Id from an accepted send; the email went out even if the body is odd."""
    try:
        body = response.json()
    except ValueError:
        logger.warning("notification_email_unreadable_reply", status_code=response.status_code)
        return None
    if not isinstance(body, dict):
        return None
    email_id = body.get("id")
    return str(email_id) if email_id is not None else None
