"""Contact submission service.

Sanitizes incoming contact data, persists it and sends the owner a
notification email when email delivery is configured.
"""

from cvdeck.contact.errors import ContactValidationError
from cvdeck.contact.models import (
    ContactDraft,
    ContactSubmissionResult,
    SanitizedContactData,
)
from cvdeck.contact.sanitize import sanitize_email, sanitize_string
from cvdeck.contact.store import ContactStore
from cvdeck.notifications.email import EmailError, ResendEmailNotifier
from cvdeck.observability.logging import get_logger
from cvdeck.observability.metrics import CONTACT_SUBMISSIONS, NOTIFICATION_EMAILS

logger = get_logger(__name__)


class ContactService:
    """Creates contact submissions from the form and from chat."""

    def __init__(
        self,
        store: ContactStore,
        notifier: ResendEmailNotifier | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Submission storage
            notifier: Email notifier, or None when email is not configured
        """
        self._store = store
        self._notifier = notifier

    def sanitize(self, data: ContactDraft) -> SanitizedContactData:
        """Trim, escape and normalize submitted fields.

        Raises:
            ContactValidationError: If the email address is invalid
        """
        email = sanitize_email(data.email)
        if not email:
            raise ContactValidationError("Invalid email address")

        return SanitizedContactData(
            name=sanitize_string(data.name),
            email=email,
            message=sanitize_string(data.message),
        )

    async def create_contact_submission(
        self,
        data: ContactDraft,
        *,
        source: str = "form",
    ) -> ContactSubmissionResult:
        """Persist a submission and send the notification email.

        Args:
            data: Unsanitized submission
            source: "form" or "chat", used for metrics

        Raises:
            ContactValidationError: If the email address is invalid
            DatabaseError: If the submission cannot be stored
            EmailError: If the notification fails; the submission stays saved
        """
        try:
            sanitized = self.sanitize(data)
        except ContactValidationError:
            CONTACT_SUBMISSIONS.labels(source=source, outcome="invalid").inc()
            raise

        submission = await self._store.insert_submission(sanitized)
        CONTACT_SUBMISSIONS.labels(source=source, outcome="stored").inc()
        logger.info(
            "contact_submission_created",
            submission_id=str(submission.id),
            source=source,
        )

        email_sent = False
        if self._notifier is not None:
            try:
                await self._notifier.send_contact_notification(sanitized)
            except EmailError:
                NOTIFICATION_EMAILS.labels(outcome="failed").inc()
                raise
            NOTIFICATION_EMAILS.labels(outcome="sent").inc()
            email_sent = True

        return ContactSubmissionResult(
            **submission.model_dump(),
            email_sent=email_sent,
        )
