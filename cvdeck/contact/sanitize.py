"""Input sanitization for contact submissions."""

import re

from email_validator import EmailNotValidError, validate_email

PLACEHOLDER_EMAIL_DOMAIN = "chat-contact.local"

_PLACEHOLDER_RE = re.compile(rf"^phone-\d*@{re.escape(PLACEHOLDER_EMAIL_DOMAIN)}$")

_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})


def escape(value: str) -> str:
    """Replace HTML-significant characters with entities."""
    return value.translate(_ESCAPES)


def sanitize_string(value: str | None) -> str:
    """Trim whitespace and escape HTML entities."""
    if not value:
        return ""
    return escape(value.strip())


def sanitize_email(value: str | None) -> str:
    """Validate and normalize an email address.

    Returns:
        The lower-cased normalized address, or "" when invalid
    """
    if not value:
        return ""

    candidate = value.strip().lower()
    # Phone-only chat contacts carry a synthetic address on a reserved domain
    if _PLACEHOLDER_RE.match(candidate):
        return candidate

    try:
        result = validate_email(
            candidate,
            check_deliverability=False,
            globally_deliverable=False,
        )
    except EmailNotValidError:
        return ""
    return result.normalized.lower()


def sanitize_html(value: str | None) -> str:
    """Escape all markup so user text is inert inside email HTML.

    No tag allowlist: formatting tags such as <b> or <a> are escaped too,
    since the notification body is plain user text.
    """
    if not value:
        return ""
    return escape(value)


def placeholder_email(phone: str) -> str:
    """Synthetic address for contacts that only left a phone number."""
    digits = re.sub(r"\D", "", phone)
    return f"phone-{digits}@{PLACEHOLDER_EMAIL_DOMAIN}"
