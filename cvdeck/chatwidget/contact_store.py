"""Long-lived persistence of the partial contact record."""

from pydantic import ValidationError

from cvdeck.chatwidget.storage import KeyValueStore, StorageError
from cvdeck.contact.partial import (
    PartialContactInfo,
    merge_contact_info,
    normalize_contact_info,
)
from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)

CONTACT_KEY = "cvdeck-contact-info"


class PartialContactStore:
    """Reads and writes the contact record. Storage failures are swallowed."""

    def __init__(self, storage: KeyValueStore, key: str = CONTACT_KEY) -> None:
        self._storage = storage
        self._key = key

    async def load(self) -> PartialContactInfo:
        """Return the stored record, or an empty one when missing or corrupt."""
        try:
            raw = await self._storage.get(self._key)
        except StorageError as e:
            logger.warning("contact_info_load_failed", error=e.message)
            return PartialContactInfo()

        if not raw:
            return PartialContactInfo()

        try:
            return normalize_contact_info(PartialContactInfo.model_validate_json(raw))
        except ValidationError:
            logger.warning("contact_info_corrupted")
            return PartialContactInfo()

    async def save(self, info: PartialContactInfo) -> None:
        payload = normalize_contact_info(info).model_dump_json(exclude_none=True)
        try:
            await self._storage.set(self._key, payload)
        except StorageError as e:
            logger.warning("contact_info_save_failed", error=e.message)

    async def merge(self, extracted: PartialContactInfo) -> PartialContactInfo:
        """Merge an extraction into the stored record and persist the result."""
        merged = merge_contact_info(await self.load(), extracted)
        await self.save(merged)
        return merged

    async def clear(self) -> None:
        try:
            await self._storage.delete(self._key)
        except StorageError as e:
            logger.warning("contact_info_clear_failed", error=e.message)
