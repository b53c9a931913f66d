"""LLM agents: the persona chat and contact extraction."""

from cvdeck.agents.contact_extraction import (
    ContactExtractionAgent,
    ContactExtractionResult,
)
from cvdeck.agents.persona import (
    PersonaAgentConfig,
    build_system_prompt,
    get_persona_agent_config,
)

__all__ = [
    "ContactExtractionAgent",
    "ContactExtractionResult",
    "PersonaAgentConfig",
    "build_system_prompt",
    "get_persona_agent_config",
]
