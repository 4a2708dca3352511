"""Buddy Store - the single writer of the Buddy simulation.

The store owns the one live ``BuddyState`` and the mood derived from it.
Every public operation:

1. runs under the store lock (scheduler ticks and user actions never
   interleave),
2. is applied by ActionProcessor, ProgressionLedger or UnlockRegistry,
3. updates the cached mood from the resulting transition,
4. writes a full snapshot through the persistence backend,
5. notifies subscribers on the event bus.

Readers get state through ``snapshot()`` or by subscribing to topics in
``treehouse.core.events``; they never hold the live aggregate.

Usage:
    store = BuddyStore(SnapshotStore(data_dir))
    store.feed("apple")
    print(store.snapshot().mood)
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from treehouse.core import events
from treehouse.core.actions import ActionProcessor
from treehouse.core.event_bus import EventBus, EventHandler
from treehouse.core.models.mood import Mood, resolve_mood
from treehouse.core.models.needs import BuddyNeeds
from treehouse.core.models.state import BuddyState
from treehouse.core.progression import Clock, ProgressionLedger, utc_now
from treehouse.core.transitions import Transition, TransitionKind
from treehouse.core.unlocks import UnlockKind, UnlockRegistry
from treehouse.utils.logging import get_logger, log_error, log_operation

if TYPE_CHECKING:
    from treehouse.systems.storage.snapshot_store import SnapshotBackend


logger = get_logger("store")


class BuddySnapshot(BaseModel):
    """Read-only view of the aggregate plus its current mood."""

    state: BuddyState
    mood: Mood

    model_config = ConfigDict(frozen=True)

    @property
    def needs(self) -> BuddyNeeds:
        return self.state.needs

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def total_stars(self) -> int:
        return self.state.total_stars

    def to_dict(self) -> dict[str, Any]:
        """Flat JSON-safe dict for display layers."""
        data = self.state.to_snapshot()
        data["mood"] = self.mood.value
        return data


class BuddyStore:
    """Single owner and writer of Buddy's state.

    Mood always follows ``resolve_mood`` except right after ``sleep``. A
    fresh Buddy (happiness 85) therefore starts ``excited``, not ``happy``,
    and mood is recomputed from the stored needs on every load.

    Attributes:
        backend: Persistence backend receiving a full snapshot after each change
        bus: Event bus for change notifications
        state: Live aggregate (treat as private outside the core)
        mood: Mood derived from ``state.needs`` (or the sleep override)
    """

    def __init__(
        self,
        backend: Optional["SnapshotBackend"] = None,
        bus: Optional[EventBus] = None,
        clock: Clock = utc_now,
    ):
        """Load state from ``backend`` or start fresh.

        Args:
            backend: Persistence backend; defaults to an in-memory store
            bus: Event bus; a private one is created if omitted
            clock: Time source for activity stamps
        """
        if backend is None:
            from treehouse.systems.storage.snapshot_store import MemorySnapshotStore
            backend = MemorySnapshotStore()
        self.backend = backend
        self.bus = bus or EventBus()
        self._lock = threading.RLock()

        self.state: BuddyState = self.backend.load() or BuddyState.create()
        self.mood: Mood = resolve_mood(self.state.needs)

        self.actions = ActionProcessor(self)
        self.progression = ProgressionLedger(self, clock=clock)

        log_operation(logger, "Buddy ready", {
            "level": self.state.level,
            "stars": self.state.total_stars,
            "mood": self.mood.value,
        })

    # ========== Reads ==========

    def snapshot(self) -> BuddySnapshot:
        """Deep copy of the current state and mood."""
        with self._lock:
            return BuddySnapshot(state=self.state.model_copy(deep=True), mood=self.mood)

    def is_activity_unlocked(self, name: str) -> bool:
        with self._lock:
            return UnlockRegistry(self.state).is_unlocked(UnlockKind.ACTIVITY, name)

    def is_outfit_unlocked(self, name: str) -> bool:
        with self._lock:
            return UnlockRegistry(self.state).is_unlocked(UnlockKind.OUTFIT, name)

    def food_count(self, food_id: str) -> int:
        with self._lock:
            return self.state.food_items.get(food_id, 0)

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        self.bus.subscribe(topic, handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        self.bus.unsubscribe(topic, handler)

    # ========== Care Actions ==========

    def feed(self, food_id: str) -> Transition:
        with self._lock:
            return self._commit(self.actions.feed(food_id))

    def pet(self) -> Transition:
        with self._lock:
            return self._commit(self.actions.pet())

    def play(self) -> Transition:
        with self._lock:
            return self._commit(self.actions.play())

    def sleep(self) -> Transition:
        with self._lock:
            return self._commit(self.actions.sleep())

    def update_needs(self, partial: Mapping[str, float]) -> Transition:
        with self._lock:
            return self._commit(self.actions.update_needs(partial))

    def tick(self) -> Transition:
        """One time-decay step. Called by the TickScheduler or a host timer."""
        with self._lock:
            return self._commit(self.actions.tick())

    # ========== Progression ==========

    def add_stars(self, amount: int) -> Transition:
        with self._lock:
            return self._commit(self.progression.add_stars(amount))

    def add_experience(self, amount: int) -> Transition:
        with self._lock:
            return self._commit(self.progression.add_experience(amount))

    def complete_activity(self, name: str) -> Transition:
        with self._lock:
            return self._commit(self.progression.complete_activity(name))

    # ========== Collections ==========

    def unlock(self, kind: UnlockKind | str, name: str) -> Transition:
        """Unlock an outfit, activity or item. Repeats are no-ops.

        Raises:
            ValueError: If ``kind`` is not a known unlock kind
        """
        with self._lock:
            kind = UnlockKind(kind)
            added = UnlockRegistry(self.state).unlock(kind, name)
            unlocked = [{"kind": kind.value, "name": name}] if added else []
            return self._commit(self._record(
                TransitionKind.UNLOCK, added, {"kind": kind.value, "name": name, "unlocked": unlocked},
            ))

    def award_badge(self, name: str) -> Transition:
        with self._lock:
            added = UnlockRegistry(self.state).award_badge(name)
            return self._commit(self._record(TransitionKind.AWARD_BADGE, added, {"badge": name}))

    def wear_outfit(self, name: str) -> Transition:
        """Change outfit. Outfits that aren't unlocked are ignored."""
        with self._lock:
            if name not in self.state.unlocked_outfits:
                logger.debug(f"Wear ignored: outfit '{name}' is locked")
                return self._commit(self._record(TransitionKind.WEAR_OUTFIT, False, {"outfit": name}))
            changed = self.state.current_outfit != name
            self.state.current_outfit = name
            return self._commit(self._record(TransitionKind.WEAR_OUTFIT, changed, {"outfit": name}))

    # ========== Persistence ==========

    def persist(self) -> bool:
        """Write the current snapshot now.

        Returns:
            True if the backend accepted the write
        """
        with self._lock:
            try:
                self.backend.save(self.state)
            except OSError as e:
                log_error(logger, "persist snapshot", e, {"level": self.state.level})
                return False
            return True

    # ========== Internals ==========

    def _record(self, kind: TransitionKind, changed: bool, data: dict[str, Any]) -> Transition:
        needs = self.state.needs
        return Transition(
            kind=kind,
            changed=changed,
            needs_before=needs,
            needs_after=needs,
            mood=self.mood,
            data=data,
        )

    def _commit(self, transition: Transition) -> Transition:
        """Adopt the transition's mood, persist, and notify subscribers."""
        old_mood = self.mood
        self.mood = transition.mood
        mood_changed = old_mood != self.mood

        if not transition.changed and not mood_changed:
            logger.debug(f"{transition}")
            return transition

        logger.info(f"{transition}")
        if transition.changed:
            self.persist()

        snapshot = self.snapshot()
        self.bus.publish(events.TOPIC_STATE_CHANGED, events.create_state_changed_event(transition, snapshot))

        if mood_changed:
            self.bus.publish(
                events.TOPIC_MOOD_CHANGED,
                events.create_mood_changed_event(old_mood.value, self.mood.value, transition.mood_source.value),
            )

        data = transition.data
        if transition.kind == TransitionKind.ADD_STARS and data.get("new_level", 0) > data.get("old_level", 0):
            self.bus.publish(
                events.TOPIC_LEVEL_UP,
                events.create_level_up_event(data["old_level"], data["new_level"], data["total_stars"]),
            )
        if data.get("unlocked"):
            self.bus.publish(events.TOPIC_UNLOCKED, events.create_unlocked_event(data["unlocked"]))

        return transition
