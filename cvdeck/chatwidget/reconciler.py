"""Contact reconciler.

Builds a submittable contact record from the conversation in the
background and submits it when the page is hidden or unloaded.

A record moves EMPTY -> PARTIAL -> COMPLETE -> SUBMITTED. Merges only
add information, reaching COMPLETE never submits by itself, and the
record is cleared only after the server confirms a submission. Duplicate
submits from two lifecycle signals are tolerated rather than prevented.
"""

from collections.abc import Sequence

from cvdeck.chatwidget.client import ChatAPIClient, ChatClientError
from cvdeck.chatwidget.contact_store import PartialContactStore
from cvdeck.contact.partial import PartialContactInfo, is_contact_info_complete
from cvdeck.conversation.filtering import filter_for_extraction, render_transcript
from cvdeck.conversation.models import ChatTurn
from cvdeck.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SUBMISSION_MESSAGE = "Contact information from chat conversation"


def build_submission_message(
    info: PartialContactInfo,
    turns: Sequence[ChatTurn] = (),
) -> str:
    """Compose the message body sent with a chat contact submission.

    A non-empty conversation wins and is sent as a full transcript.
    Otherwise ``Company:`` and ``Phone:`` lines, in that order, head the
    stored message or the default text.
    """
    if turns:
        return render_transcript(turns)

    lines = []
    if info.company:
        lines.append(f"Company: {info.company}")
    if info.phone:
        lines.append(f"Phone: {info.phone}")
    lines.append(info.message or DEFAULT_SUBMISSION_MESSAGE)
    return "\n".join(lines)


class ContactReconciler:
    """Extract, merge and submit the visitor's contact details."""

    def __init__(self, client: ChatAPIClient, store: PartialContactStore) -> None:
        self._client = client
        self._store = store

    async def extract(self, filtered: list[dict[str, str]]) -> PartialContactInfo:
        """Run one extraction over already-filtered user turns.

        Never raises. Empty input and any failure yield an empty record.
        """
        if not filtered:
            return PartialContactInfo()

        try:
            return await self._client.extract_contact(filtered)
        except ChatClientError as e:
            logger.debug("extraction_failed", error=e.message, status_code=e.status_code)
            return PartialContactInfo()

    async def run_passive_cycle(self, turns: Sequence[ChatTurn]) -> PartialContactInfo:
        """Extract from the conversation and merge into the stored record.

        Skipped once the stored record is complete.
        """
        stored = await self._store.load()
        if is_contact_info_complete(stored):
            logger.debug("extraction_skipped_complete")
            return stored

        extracted = await self.extract(filter_for_extraction(turns))
        if extracted.is_empty():
            return stored

        merged = await self._store.merge(extracted)
        logger.info(
            "contact_info_merged",
            fields=sorted(merged.present_fields()),
            complete=is_contact_info_complete(merged),
        )
        return merged

    async def submit(self, turns: Sequence[ChatTurn] = ()) -> bool:
        """Submit the stored record if it is complete.

        Returns:
            True when the server accepted the submission and the record
            was cleared. Never raises.
        """
        info = await self._store.load()
        if not is_contact_info_complete(info):
            return False

        payload = {
            "name": info.name or "",
            "company": info.company or "",
            "message": build_submission_message(info, turns),
        }
        if info.email:
            payload["email"] = info.email
        if info.phone:
            payload["phone"] = info.phone

        try:
            result = await self._client.submit_contact(payload)
        except ChatClientError as e:
            logger.warning("contact_submit_failed", error=e.message, status_code=e.status_code)
            return False

        if not result.success:
            logger.warning("contact_submit_rejected")
            return False

        await self._store.clear()
        logger.info("contact_submitted")
        return True
