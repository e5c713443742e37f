"""Edit session states and transitions.

An editable object is either idle or editing. ``begin_edit`` moves it to
editing, ``cancel_edit`` and ``end_edit`` return it to idle. Transitions
not listed here are no-ops on the session, except ``end_edit`` which is
accepted from either state.
"""

from __future__ import annotations

from enum import StrEnum


class EditState(StrEnum):
    """Machine state of an edit session."""

    IDLE = "idle"
    EDITING = "editing"


EDIT_TRANSITIONS: dict[str, list[str]] = {
    "idle": ["editing"],
    "editing": ["idle"],
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]] = EDIT_TRANSITIONS,
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed
