"""Persona agent: the chat assistant that speaks for the CV owner.

The system prompt is assembled from profile data plus the persona
section of the configuration.
"""

from collections import defaultdict

from pydantic import BaseModel, Field

from cvdeck.config.models.persona import PersonaConfig
from cvdeck.config.settings import Settings
from cvdeck.db.errors import StoreError
from cvdeck.observability.logging import get_logger
from cvdeck.profile.models import Education, Profile, ProfileData, Skill, WorkExperience
from cvdeck.profile.service import ProfileService

logger = get_logger(__name__)

UNCATEGORIZED_SKILLS = "Other"


class PersonaAgentConfig(BaseModel):
    """Everything needed to run the persona chat model."""

    name: str
    model: str
    temperature: float
    max_tokens: int
    system_prompt: str
    from_profile: bool = Field(
        default=True,
        description="False when the fallback prompt was used",
    )


def _base_prompt(persona: PersonaConfig) -> str:
    who = persona.display_name
    return (
        f"You are an AI assistant representing {who}. You help answer questions "
        f"about {who}, their background, skills, experience, and projects. "
        "Be friendly, professional, and helpful in your responses.\n\n"
        f"IMPORTANT: You are representing {who}. Always speak in first person when "
        "talking about their experiences, skills, or background. "
        "Be conversational and authentic."
    )


def _profile_section(profile: Profile | None, persona: PersonaConfig) -> str:
    if profile is None:
        return ""

    section = f"## About {persona.display_name}\nName: {profile.name}\nTitle: {profile.title}"
    if profile.bio:
        section += "\n\nBio:\n" + "\n\n".join(profile.bio)
    return section


def group_skills_by_category(skills: list[Skill]) -> dict[str, list[str]]:
    """Group skill names by category, keeping first-seen category order."""
    grouped: dict[str, list[str]] = defaultdict(list)
    for skill in skills:
        grouped[skill.category or UNCATEGORIZED_SKILLS].append(skill.name)
    return dict(grouped)


def _skills_section(skills: list[Skill]) -> str:
    if not skills:
        return ""

    lines = ["## Skills"]
    for category, names in group_skills_by_category(skills).items():
        lines.append(f"{category}: {', '.join(names)}")
    return "\n".join(lines)


def format_work_period(work: WorkExperience) -> str:
    if work.is_current:
        end = "Present"
    else:
        end = work.end_date.isoformat() if work.end_date else ""
    start = work.start_date.isoformat()
    return f"{start} - {end}" if end else start


def _work_section(work_experience: list[WorkExperience]) -> str:
    if not work_experience:
        return ""

    entries = ["## Work Experience"]
    for work in work_experience:
        entry = f"{work.company_name} - {work.position}\nPeriod: {format_work_period(work)}"
        if work.description:
            entry += f"\n{work.description}"
        entries.append(entry)
    return "\n\n".join(entries)


def format_education_period(education: Education) -> str:
    end = education.end_date.isoformat() if education.end_date else "Present"
    return f"{education.start_date.isoformat()} - {end}"


def _education_section(education: list[Education], courses: list[str]) -> str:
    if not education and not courses:
        return ""

    entries = ["## Education"]
    for edu in education:
        entry = f"{edu.institution_name} - {edu.degree}"
        if edu.field:
            entry += f" in {edu.field}"
        entry += f"\nPeriod: {format_education_period(edu)}"
        if edu.description:
            entry += f"\n{edu.description}"
        entries.append(entry)

    section = "\n\n".join(entries)
    if courses:
        section += "\n" + "\n".join(f"I have done a course in {c}" for c in courses)
    return section


def _personal_section(notes: list[str]) -> str:
    if not notes:
        return ""
    return "## Personal life\n" + "\n".join(notes)


def _instructions_section(instructions: list[str]) -> str:
    if not instructions:
        return ""
    return "## Instructions\n" + "\n".join(f"- {line}" for line in instructions)


def build_system_prompt(profile_data: ProfileData, persona: PersonaConfig) -> str:
    """Build the persona system prompt.

    Sections with nothing to say are left out entirely.
    """
    sections = [
        _base_prompt(persona),
        _profile_section(profile_data.profile, persona),
        _skills_section(profile_data.skills),
        _work_section(profile_data.work_experience),
        _education_section(profile_data.education, persona.courses),
        _personal_section(persona.personal_notes),
        _instructions_section(persona.instructions),
    ]
    return "\n\n".join(section for section in sections if section)


def build_fallback_prompt(persona: PersonaConfig) -> str:
    return (
        f"You are an AI assistant representing {persona.display_name}, "
        "a helpful AI assistant. Be friendly, professional, and concise in your responses."
    )


async def get_persona_agent_config(
    profile_service: ProfileService,
    settings: Settings,
) -> PersonaAgentConfig:
    """Load profile data and build the persona configuration.

    Falls back to a short generic prompt when profile data is unavailable.
    """
    persona = settings.persona
    chat = settings.providers.llm.chat

    try:
        profile_data = await profile_service.get_profile_data()
        system_prompt = build_system_prompt(profile_data, persona)
        from_profile = True
    except StoreError as e:
        logger.warning("persona_profile_unavailable", error=str(e))
        system_prompt = build_fallback_prompt(persona)
        from_profile = False

    return PersonaAgentConfig(
        name=persona.agent_name,
        model=chat.model,
        temperature=chat.temperature,
        max_tokens=chat.max_tokens,
        system_prompt=system_prompt,
        from_profile=from_profile,
    )
