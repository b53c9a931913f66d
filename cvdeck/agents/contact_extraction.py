"""Contact extraction agent.

Asks the extraction model which contact details the visitor has
volunteered so far in the chat.
"""

from pydantic import BaseModel, Field

from cvdeck.contact.partial import PartialContactInfo, normalize_contact_info
from cvdeck.observability.logging import get_logger
from cvdeck.providers.llm.executor import LLMExecutor

logger = get_logger(__name__)

EXTRACTION_INSTRUCTIONS = (
    "Extract contact information from user messages. Only extract fields that "
    "are explicitly mentioned by the user. Return null for any field that is "
    "not clearly stated."
)


class ContactExtractionResult(BaseModel):
    """Structured output requested from the model."""

    name: str | None = Field(default=None, description="The person's name if mentioned")
    email: str | None = Field(
        default=None,
        description="The person's email address if mentioned",
    )
    phone: str | None = Field(
        default=None,
        description="The person's phone number if mentioned",
    )
    company: str | None = Field(
        default=None,
        description="The person's company name if mentioned",
    )
    message: str | None = Field(
        default=None,
        description="The main message or inquiry if present",
    )

    def to_partial(self) -> PartialContactInfo:
        """Convert to a contact record, dropping null and blank fields."""
        return normalize_contact_info(PartialContactInfo(**self.model_dump()))


class ContactExtractionAgent:
    """Runs structured extraction over the visitor's own messages."""

    def __init__(self, executor: LLMExecutor) -> None:
        self._executor = executor

    async def extract(self, messages: list[dict[str, str]]) -> PartialContactInfo:
        """Extract contact fields from user messages.

        Args:
            messages: ``{"role": "user", "content": ...}`` dicts

        Raises:
            ProviderError: When the model fails or returns unusable output
        """
        contents = [m["content"] for m in messages if m.get("content")]
        if not contents:
            return PartialContactInfo()

        result, _ = await self._executor.generate_structured(
            "\n\n".join(contents),
            ContactExtractionResult,
            system_prompt=EXTRACTION_INSTRUCTIONS,
        )
        extracted = result.to_partial()
        logger.debug("contact_fields_extracted", fields=sorted(extracted.present_fields()))
        return extracted
