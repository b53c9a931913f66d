"""In-memory implementation of ContactStore."""

from cvdeck.contact.models import ContactSubmission, SanitizedContactData
from cvdeck.contact.store import ContactStore


class InMemoryContactStore(ContactStore):
    """In-memory ContactStore for testing and development.

    Not suitable for production use.
    """

    def __init__(self) -> None:
        self._submissions: list[ContactSubmission] = []

    async def insert_submission(self, data: SanitizedContactData) -> ContactSubmission:
        submission = ContactSubmission(
            name=data.name,
            email=data.email,
            message=data.message,
        )
        self._submissions.append(submission)
        return submission

    async def list_submissions(self, *, limit: int = 100) -> list[ContactSubmission]:
        results = sorted(self._submissions, key=lambda s: s.created_at, reverse=True)
        return results[:limit]
