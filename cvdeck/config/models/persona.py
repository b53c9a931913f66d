"""Persona configuration for the chat agent."""

from pydantic import BaseModel, Field


class PersonaConfig(BaseModel):
    """Who the chat agent speaks for, plus free-form prompt sections."""

    agent_name: str = Field(default="cv-deck-agent", description="Agent identifier")
    display_name: str = Field(
        default="the site owner",
        description="Name the assistant represents",
    )
    courses: list[str] = Field(
        default_factory=list,
        description="Extra course lines appended to the education section",
    )
    personal_notes: list[str] = Field(
        default_factory=list,
        description="Lines for the personal life section",
    )
    instructions: list[str] = Field(
        default_factory=lambda: [
            "Answer questions about the background, experience, and skills described above",
            "Be conversational and friendly",
            "If asked about something not in the provided context, politely say you don't have that information",
            "Keep responses concise but informative",
            "Respond in plain text, not markdown",
        ],
        description="Bullet instructions for the assistant",
    )
