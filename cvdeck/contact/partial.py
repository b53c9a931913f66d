"""Partial contact record inferred from a chat conversation.

The record fills in over several turns. Merging only ever adds or
overrides with non-empty values, and the record counts as complete once
it names the visitor and gives one way to reach them.
"""

from pydantic import BaseModel, ConfigDict

CONTACT_FIELDS: tuple[str, ...] = ("name", "email", "phone", "company", "message")

MIN_NAME_LENGTH = 2
MIN_PHONE_LENGTH = 10


class PartialContactInfo(BaseModel):
    """Contact details gathered so far; every field is optional.

    An absent field (None) differs from an empty string only until the
    record is normalized: empty and whitespace-only values are pruned.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    message: str | None = None

    def present_fields(self) -> dict[str, str]:
        """Fields holding a non-blank value."""
        return {
            field: value
            for field in CONTACT_FIELDS
            if _is_present(value := getattr(self, field))
        }

    def has_any(self) -> bool:
        return bool(self.present_fields())

    def is_empty(self) -> bool:
        return not self.has_any()


def _is_present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def normalize_contact_info(info: PartialContactInfo) -> PartialContactInfo:
    """Drop empty and whitespace-only fields."""
    return PartialContactInfo(**info.present_fields())


def merge_contact_info(
    existing: PartialContactInfo,
    extracted: PartialContactInfo,
) -> PartialContactInfo:
    """Merge a fresh extraction into the stored record.

    Non-empty extracted fields override stored ones. Empty or missing
    extracted fields leave the stored value untouched.
    """
    merged = existing.model_dump()
    merged.update(extracted.present_fields())
    return normalize_contact_info(PartialContactInfo(**merged))


def is_contact_info_complete(info: PartialContactInfo) -> bool:
    """True when the record is worth submitting.

    Requires a name of at least two characters plus an email containing
    "@" or a phone number of at least ten characters after trimming.
    The phone rule counts raw characters, not digits.
    """
    has_name = info.name is not None and len(info.name) >= MIN_NAME_LENGTH
    has_email = info.email is not None and "@" in info.email
    has_phone = info.phone is not None and len(info.phone.strip()) >= MIN_PHONE_LENGTH
    return has_name and (has_email or has_phone)
