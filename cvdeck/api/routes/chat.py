"""Chat endpoints: streaming completion, contact extraction and submission."""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import TypeAdapter, ValidationError

from cvdeck.agents.persona import get_persona_agent_config
from cvdeck.api.dependencies import (
    ChatExecutorDep,
    ContactServiceDep,
    ExtractionAgentDep,
    ProfileServiceDep,
    SettingsDep,
)
from cvdeck.api.exceptions import LLMProviderError
from cvdeck.api.models.chat import ChatMessage, ChatRequest, ExtractContactResponse
from cvdeck.api.models.contact import (
    ChatContactRequest,
    ChatContactResponse,
    MissingFields,
    MissingFieldsResponse,
)
from cvdeck.contact.models import ContactDraft
from cvdeck.contact.sanitize import placeholder_email
from cvdeck.conversation.filtering import filter_for_extraction
from cvdeck.observability.logging import get_logger
from cvdeck.observability.metrics import CHAT_COMPLETIONS, CONTACT_EXTRACTIONS
from cvdeck.providers.llm.base import LLMMessage, ProviderError

logger = get_logger(__name__)

router = APIRouter(prefix="/chat")

DEFAULT_CHAT_CONTACT_MESSAGE = "Contact information from chat conversation"
CHAT_CONTACT_SUCCESS_MESSAGE = (
    "Thank you for your contact information! I'll get back to you soon."
)
MISSING_FIELDS_MESSAGE = "Missing required fields: name and (email or phone) are required"

_MESSAGES = TypeAdapter(list[ChatMessage])


@router.post("")
async def chat(
    body: ChatRequest,
    settings: SettingsDep,
    profile_service: ProfileServiceDep,
    executor: ChatExecutorDep,
) -> StreamingResponse:
    """Stream the persona's reply as plain text chunks.

    System messages from the client are dropped; the persona prompt is
    built server-side. Provider failures before the first chunk return
    502. Later failures end the stream early.
    """
    agent_config = await get_persona_agent_config(profile_service, settings)

    messages = [LLMMessage(role="system", content=agent_config.system_prompt)]
    messages.extend(
        LLMMessage(role=m.role, content=m.content)
        for m in body.messages
        if m.role != "system"
    )

    stream = executor.generate_stream(messages)
    try:
        first = await anext(stream, "")
    except ProviderError as e:
        CHAT_COMPLETIONS.labels(outcome="failed").inc()
        logger.error("chat_completion_failed", error=str(e))
        raise LLMProviderError("The chat model is unavailable. Please try again later.") from e

    CHAT_COMPLETIONS.labels(outcome="streamed").inc()

    async def body_iterator() -> AsyncIterator[str]:
        if first:
            yield first
        async for chunk in stream:
            yield chunk

    return StreamingResponse(body_iterator(), media_type="text/plain; charset=utf-8")


@router.post("/extract-contact", response_model=ExtractContactResponse, response_model_exclude_none=True)
async def extract_contact(
    request: Request,
    agent: ExtractionAgentDep,
) -> ExtractContactResponse:
    """Extract contact fields from the visitor's messages.

    Never fails: a malformed body, nothing to extract or any model
    failure all answer ``{}``.
    """
    try:
        payload = await request.json()
        messages = _MESSAGES.validate_python(payload.get("messages"))
    except (ValueError, AttributeError, ValidationError):
        CONTACT_EXTRACTIONS.labels(outcome="invalid").inc()
        return ExtractContactResponse()

    filtered = filter_for_extraction(messages)
    if not filtered:
        CONTACT_EXTRACTIONS.labels(outcome="empty").inc()
        return ExtractContactResponse()

    try:
        extracted = await agent.extract(filtered)
    except ProviderError as e:
        CONTACT_EXTRACTIONS.labels(outcome="failed").inc()
        logger.warning("extraction_failed", error=str(e))
        return ExtractContactResponse()

    CONTACT_EXTRACTIONS.labels(outcome="extracted").inc()
    return ExtractContactResponse(**extracted.present_fields())


def format_chat_contact_message(
    message: str | None,
    company: str | None,
    phone: str | None,
    email: str | None,
) -> str:
    """Prefix company and, for phone-only contacts, phone to the message."""
    formatted = message or DEFAULT_CHAT_CONTACT_MESSAGE
    if company:
        formatted = f"Company: {company}\n\n{formatted}"
    if phone and not email:
        formatted = f"Phone: {phone}\n\n{formatted}"
    return formatted


@router.post(
    "/submit-contact",
    response_model=ChatContactResponse,
    responses={400: {"model": MissingFieldsResponse}},
)
async def submit_chat_contact(
    body: ChatContactRequest,
    contact_service: ContactServiceDep,
) -> ChatContactResponse | JSONResponse:
    """Store a contact record assembled from the chat and notify the owner.

    Requires a name and either an email or a phone number.
    """
    name, email, phone = body.name, body.email, body.phone
    if not name or (not email and not phone):
        missing = MissingFieldsResponse(
            message=MISSING_FIELDS_MESSAGE,
            missing_fields=MissingFields(
                name=not name,
                email=not email,
                phone=not phone,
            ),
        )
        return JSONResponse(status_code=400, content=missing.model_dump())

    draft = ContactDraft(
        name=name.strip(),
        email=email or placeholder_email(phone or ""),
        message=format_chat_contact_message(body.message, body.company, phone, email).strip(),
    )
    result = await contact_service.create_contact_submission(draft, source="chat")

    return ChatContactResponse(
        message=CHAT_CONTACT_SUCCESS_MESSAGE,
        email_sent=result.email_sent,
    )
