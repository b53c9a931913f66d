"""Conversation domain shared by the API and the chat widget."""

from cvdeck.conversation.filtering import filter_for_extraction, render_transcript
from cvdeck.conversation.models import (
    DEFAULT_GREETING,
    GREETING_TURN_ID,
    ChatTurn,
    TurnRole,
    new_turn_id,
    seed_greeting,
)

__all__ = [
    "ChatTurn",
    "TurnRole",
    "DEFAULT_GREETING",
    "GREETING_TURN_ID",
    "new_turn_id",
    "seed_greeting",
    "filter_for_extraction",
    "render_transcript",
]
