"""Progression ledger for Buddy's Treehouse.

Stars drive levels (one level per 50 stars) and levels drive content
unlocks. Stars, experience and the completed-activity counter only ever
grow; amounts below zero are ignored with a warning.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Callable

from treehouse.core import rules
from treehouse.core.transitions import Transition, TransitionKind, ignored
from treehouse.core.unlocks import UnlockRegistry
from treehouse.utils.logging import get_logger

if TYPE_CHECKING:
    from treehouse.core.store import BuddyStore


logger = get_logger("progression")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class ProgressionLedger:
    """Stars, levels, experience and activity bookkeeping."""

    def __init__(self, store: "BuddyStore", clock: Clock = utc_now):
        """Initialize the ledger.

        Args:
            store: Owning store
            clock: Source of "now" for ``last_played`` stamps
        """
        self.store = store
        self.clock = clock

    def add_stars(self, amount: int) -> Transition:
        """Add stars, level up if a boundary is crossed, and grant level unlocks.

        Every unlock whose level lies in ``(old_level, new_level]`` is
        granted, so a single large award cannot skip a threshold. A stored
        level that lags its stars catches up here, even on a zero award.
        """
        state = self.store.state
        if amount < 0:
            logger.warning(f"Ignoring negative star amount: {amount}")
            return ignored(TransitionKind.ADD_STARS, state.needs, self.store.mood, {"amount": amount})

        old_level = state.level
        total = state.total_stars + amount
        new_level = max(old_level, rules.level_for_stars(total))

        state.total_stars = total
        unlocked: list[dict[str, str]] = []
        if new_level > old_level:
            state.level = new_level
            logger.info(f"Level up: {old_level} -> {new_level} ({total} stars)")
            registry = UnlockRegistry(state)
            for level in sorted(rules.LEVEL_UNLOCKS):
                if old_level < level <= new_level:
                    for kind, name in rules.LEVEL_UNLOCKS[level]:
                        if registry.unlock(kind, name):
                            unlocked.append({"kind": kind.value, "name": name})

        return Transition(
            kind=TransitionKind.ADD_STARS,
            changed=amount > 0 or new_level > old_level,
            needs_before=state.needs,
            needs_after=state.needs,
            mood=self.store.mood,
            data={
                "amount": amount,
                "total_stars": total,
                "old_level": old_level,
                "new_level": new_level,
                "unlocked": unlocked,
            },
        )

    def add_experience(self, amount: int) -> Transition:
        """Add experience points. No derived effects."""
        state = self.store.state
        if amount < 0:
            logger.warning(f"Ignoring negative experience amount: {amount}")
            return ignored(TransitionKind.ADD_EXPERIENCE, state.needs, self.store.mood, {"amount": amount})

        state.experience += amount
        return Transition(
            kind=TransitionKind.ADD_EXPERIENCE,
            changed=amount > 0,
            needs_before=state.needs,
            needs_after=state.needs,
            mood=self.store.mood,
            data={"amount": amount, "experience": state.experience},
        )

    def complete_activity(self, name: str) -> Transition:
        """Record a finished activity. Star awards are the caller's job."""
        state = self.store.state
        played_at = self.clock()
        state.activities_completed += 1
        state.last_played = played_at
        return Transition(
            kind=TransitionKind.COMPLETE_ACTIVITY,
            needs_before=state.needs,
            needs_after=state.needs,
            mood=self.store.mood,
            data={
                "activity": name,
                "activities_completed": state.activities_completed,
                "last_played": played_at.isoformat(),
            },
        )
