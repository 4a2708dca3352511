"""Care actions and time decay for Buddy's Treehouse.

The ActionProcessor is the only component that writes Buddy's needs and
food inventory. Each method computes the full result first and then
assigns it, so a caller never sees a half-applied action. Every needs
change ends with a fresh mood: resolved from the post-clamp needs, or
forced to ``happy`` by ``sleep``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from treehouse.core import rules
from treehouse.core.models.mood import Mood, resolve_mood
from treehouse.core.models.needs import BuddyNeeds
from treehouse.core.transitions import MoodSource, Transition, TransitionKind, ignored
from treehouse.utils.logging import get_logger

if TYPE_CHECKING:
    from treehouse.core.store import BuddyStore


logger = get_logger("actions")


class ActionProcessor:
    """Applies feed, pet, play, sleep, needs updates and decay ticks."""

    def __init__(self, store: "BuddyStore"):
        """Initialize the processor.

        Args:
            store: Owning store; its ``state`` and ``mood`` are read here
        """
        self.store = store

    def feed(self, food_id: str) -> Transition:
        """Feed Buddy one serving of ``food_id``.

        Without stock the action is ignored and nothing changes.
        Unknown food ids restore the default hunger value.
        """
        state = self.store.state
        stock = state.food_items.get(food_id, 0)
        if stock <= 0:
            logger.debug(f"Feed ignored: no '{food_id}' left")
            return ignored(TransitionKind.FEED, state.needs, self.store.mood, {"food_id": food_id})

        hunger_gain = rules.food_value(food_id)
        needs = state.needs.adjust(hunger=hunger_gain, happiness=rules.FEED_HAPPINESS_BONUS)

        food_items = dict(state.food_items)
        food_items[food_id] = stock - 1

        transition = self._resolved(
            TransitionKind.FEED,
            needs,
            {"food_id": food_id, "hunger_gain": hunger_gain, "remaining": stock - 1},
            changed=True,
        )
        state.food_items = food_items
        return transition

    def pet(self) -> Transition:
        """Pet Buddy."""
        needs = self.store.state.needs.adjust(happiness=rules.PET_HAPPINESS)
        return self._resolved(TransitionKind.PET, needs)

    def play(self) -> Transition:
        """Play with Buddy: happier, a little more tired."""
        needs = self.store.state.needs.adjust(
            happiness=rules.PLAY_HAPPINESS,
            energy=-rules.PLAY_ENERGY_COST,
        )
        return self._resolved(TransitionKind.PLAY, needs)

    def sleep(self) -> Transition:
        """Put Buddy to sleep.

        Energy is set to full and mood is forced to ``happy`` regardless of
        the other gauges. This override is the only mood write that does
        not go through ``resolve_mood``.
        """
        state = self.store.state
        before = state.needs
        after = before.merge({"energy": rules.SLEEP_ENERGY})
        state.needs = after
        return Transition(
            kind=TransitionKind.SLEEP,
            needs_before=before,
            needs_after=after,
            mood=Mood.HAPPY,
            mood_source=MoodSource.OVERRIDE,
        )

    def update_needs(self, partial: Mapping[str, float]) -> Transition:
        """Overlay absolute gauge values, clamped, and re-derive mood."""
        needs = self.store.state.needs.merge(partial)
        return self._resolved(TransitionKind.UPDATE_NEEDS, needs, {"fields": sorted(partial)})

    def tick(self) -> Transition:
        """Apply one step of time decay."""
        needs = self.store.state.needs.decayed(
            hunger=rules.DECAY_HUNGER,
            energy=rules.DECAY_ENERGY,
            happiness=rules.DECAY_HAPPINESS,
            happiness_floor=rules.DECAY_HAPPINESS_FLOOR,
        )
        return self._resolved(TransitionKind.TICK, needs)

    def _resolved(self, kind: TransitionKind, needs: BuddyNeeds,
                  data: dict | None = None, changed: bool | None = None) -> Transition:
        """Commit ``needs`` and build a transition with the resolved mood."""
        state = self.store.state
        before = state.needs
        state.needs = needs
        return Transition(
            kind=kind,
            changed=before != needs if changed is None else changed,
            needs_before=before,
            needs_after=needs,
            mood=resolve_mood(needs),
            mood_source=MoodSource.RESOLVED,
            data=data or {},
        )
