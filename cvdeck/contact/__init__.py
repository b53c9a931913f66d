"""Contact domain: form submissions and the chat-inferred contact record."""

from cvdeck.contact.errors import ContactValidationError
from cvdeck.contact.models import (
    ContactDraft,
    ContactFormData,
    ContactSubmission,
    ContactSubmissionResult,
    SanitizedContactData,
)
from cvdeck.contact.partial import (
    PartialContactInfo,
    is_contact_info_complete,
    merge_contact_info,
    normalize_contact_info,
)
from cvdeck.contact.store import ContactStore

__all__ = [
    "ContactDraft",
    "ContactFormData",
    "ContactStore",
    "ContactSubmission",
    "ContactSubmissionResult",
    "ContactValidationError",
    "PartialContactInfo",
    "SanitizedContactData",
    "is_contact_info_complete",
    "merge_contact_info",
    "normalize_contact_info",
]
