"""Contact form endpoint."""

from fastapi import APIRouter

from cvdeck.api.dependencies import ContactServiceDep
from cvdeck.api.models.contact import ContactResponse
from cvdeck.contact.models import ContactFormData
from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

CONTACT_SUCCESS_MESSAGE = "Thank you for your message! I'll get back to you soon."


@router.post("/contact", response_model=ContactResponse)
async def submit_contact_form(
    data: ContactFormData,
    contact_service: ContactServiceDep,
) -> ContactResponse:
    """Validate, store and forward a contact form submission.

    Sanitization, persistence and the notification email are handled by
    the contact service. Errors are rendered by the global handlers.
    """
    result = await contact_service.create_contact_submission(data, source="form")
    logger.debug("contact_form_processed", email_sent=result.email_sent)
    return ContactResponse(message=CONTACT_SUCCESS_MESSAGE)
