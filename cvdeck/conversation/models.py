"""Chat turn models shared by the API and the chat widget."""

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

GREETING_TURN_ID = "initial"
DEFAULT_GREETING = "Hi 👋, You can ask me anything! Be professional about it..."


class TurnRole(str, Enum):
    """Who produced a turn."""

    USER = "user"
    ASSISTANT = "assistant"


def new_turn_id() -> str:
    """Opaque id that sorts in creation order within one process."""
    return str(time.time_ns())


class ChatTurn(BaseModel):
    """One message in the conversation.

    Turns are immutable. The in-flight assistant turn is replaced by
    a copy for every streamed chunk.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    id: str = Field(default_factory=new_turn_id, description="Opaque turn id")
    role: TurnRole = Field(..., description="Turn author")
    content: str = Field(default="", description="Turn text")

    def with_appended(self, chunk: str) -> "ChatTurn":
        """Return a copy with ``chunk`` appended to the content."""
        return self.model_copy(update={"content": self.content + chunk})


def seed_greeting(text: str = DEFAULT_GREETING) -> ChatTurn:
    """Build the canned assistant greeting that opens every conversation."""
    return ChatTurn(id=GREETING_TURN_ID, role=TurnRole.ASSISTANT, content=text)
