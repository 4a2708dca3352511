"""
Transition records for Buddy's Treehouse.

Every public store operation produces one immutable ``Transition`` that
describes what happened: which action ran, the needs before and after, the
resulting mood and where that mood came from. Ignored actions still produce
a record, with ``changed=False``.

The sleep override is a transition whose ``mood_source`` is
``MoodSource.OVERRIDE``; every other needs change carries ``RESOLVED``.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from treehouse.core.models.mood import Mood
from treehouse.core.models.needs import BuddyNeeds


class TransitionKind(str, Enum):
    """Which operation produced a transition."""
    # Care actions
    FEED = "feed"
    PET = "pet"
    PLAY = "play"
    SLEEP = "sleep"
    UPDATE_NEEDS = "update_needs"

    # Time
    TICK = "tick"

    # Progression
    ADD_STARS = "add_stars"
    ADD_EXPERIENCE = "add_experience"
    COMPLETE_ACTIVITY = "complete_activity"

    # Collections
    UNLOCK = "unlock"
    AWARD_BADGE = "award_badge"
    WEAR_OUTFIT = "wear_outfit"


class MoodSource(str, Enum):
    """How the mood after a transition was obtained."""
    RESOLVED = "resolved"    # Derived from the post-change needs
    OVERRIDE = "override"    # Forced by the action (sleep)
    UNCHANGED = "unchanged"  # Needs untouched, previous mood carried over


class Transition(BaseModel):
    """Immutable record of one applied (or ignored) operation.

    Attributes:
        kind: Operation that ran
        changed: Whether any state changed
        needs_before: Needs prior to the operation
        needs_after: Needs after the operation
        mood: Mood after the operation
        mood_source: Whether mood was resolved, overridden or carried over
        data: Operation-specific details (food id, stars added, unlocks...)
        timestamp: When the operation ran
    """

    kind: TransitionKind
    changed: bool = True
    needs_before: BuddyNeeds
    needs_after: BuddyNeeds
    mood: Mood
    mood_source: MoodSource = MoodSource.UNCHANGED
    data: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        status = "applied" if self.changed else "ignored"
        return f"[{self.kind.value}] {status} -> mood={self.mood.value}"


def ignored(kind: TransitionKind, needs: BuddyNeeds, mood: Mood,
            data: Optional[dict[str, Any]] = None) -> Transition:
    """Build the record for an operation that changed nothing."""
    return Transition(
        kind=kind,
        changed=False,
        needs_before=needs,
        needs_after=needs,
        mood=mood,
        mood_source=MoodSource.UNCHANGED,
        data=data or {},
    )
