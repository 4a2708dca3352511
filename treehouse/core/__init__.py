"""
Core - the Buddy simulation state machine.

Needs, mood, progression and unlocks, applied by a single writer
(``BuddyStore``) and driven by user actions and the ``TickScheduler``.
"""

from treehouse.core.event_bus import EventBus, EventPayload
from treehouse.core.models import BuddyNeeds, BuddyState, Mood, resolve_mood
from treehouse.core.transitions import MoodSource, Transition, TransitionKind
from treehouse.core.unlocks import UnlockKind, UnlockRegistry
from treehouse.core.store import BuddySnapshot, BuddyStore
from treehouse.core.scheduler import TickScheduler

__all__ = [
    "BuddyNeeds",
    "BuddySnapshot",
    "BuddyState",
    "BuddyStore",
    "EventBus",
    "EventPayload",
    "Mood",
    "MoodSource",
    "TickScheduler",
    "Transition",
    "TransitionKind",
    "UnlockKind",
    "UnlockRegistry",
    "resolve_mood",
]
