"""Turn filtering and transcript rendering."""

from collections.abc import Iterable
from typing import Any

from cvdeck.conversation.models import GREETING_TURN_ID, TurnRole

_ROLE_LABELS = {
    TurnRole.USER.value: "User",
    TurnRole.ASSISTANT.value: "Assistant",
}


def _role_value(turn: Any) -> str:
    role = turn.role
    return role.value if isinstance(role, TurnRole) else str(role)


def filter_for_extraction(turns: Iterable[Any]) -> list[dict[str, str]]:
    """Keep only what the visitor typed.

    Assistant turns and the seeded greeting are dropped so boilerplate
    never feeds contact extraction. Accepts any objects exposing ``role``,
    ``content`` and optionally ``id``.

    Returns:
        ``[{"role": "user", "content": ...}, ...]`` in conversation order
    """
    filtered: list[dict[str, str]] = []
    for turn in turns:
        if getattr(turn, "id", None) == GREETING_TURN_ID:
            continue
        if _role_value(turn) != TurnRole.USER.value:
            continue
        filtered.append({"role": TurnRole.USER.value, "content": turn.content})
    return filtered


def render_transcript(turns: Iterable[Any]) -> str:
    """Render turns as ``User: ...`` / ``Assistant: ...`` lines."""
    lines = []
    for turn in turns:
        role = _role_value(turn)
        label = _ROLE_LABELS.get(role, role.capitalize())
        lines.append(f"{label}: {turn.content}")
    return "\n".join(lines)
