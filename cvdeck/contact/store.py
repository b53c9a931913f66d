"""ContactStore abstract interface."""

from abc import ABC, abstractmethod

from cvdeck.contact.models import ContactSubmission, SanitizedContactData


class ContactStore(ABC):
    """Abstract interface for contact submission storage."""

    @abstractmethod
    async def insert_submission(self, data: SanitizedContactData) -> ContactSubmission:
        """Persist a submission and return the stored record.

        Raises:
            DatabaseError: If the write fails
        """
        pass

    @abstractmethod
    async def list_submissions(self, *, limit: int = 100) -> list[ContactSubmission]:
        """List submissions, newest first."""
        pass
