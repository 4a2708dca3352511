"""Canonical event topics and payloads for Buddy's Treehouse."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

from .event_bus import EventPayload

if TYPE_CHECKING:
    from treehouse.core.store import BuddySnapshot
    from treehouse.core.transitions import Transition

# Event Topics
TOPIC_STATE_CHANGED = "buddy.state_changed"
TOPIC_MOOD_CHANGED = "buddy.mood_changed"
TOPIC_LEVEL_UP = "buddy.level_up"
TOPIC_UNLOCKED = "buddy.unlocked"


def create_state_changed_event(transition: "Transition", snapshot: "BuddySnapshot") -> EventPayload:
    """Create a state changed event (sent after every applied operation)."""
    return {
        "transition": transition,
        "snapshot": snapshot,
    }


def create_mood_changed_event(old_mood: str, new_mood: str, source: str) -> EventPayload:
    """Create a mood changed event."""
    return {
        "old_mood": old_mood,
        "new_mood": new_mood,
        "source": source,
    }


def create_level_up_event(old_level: int, new_level: int, total_stars: int) -> EventPayload:
    """Create a level up event."""
    return {
        "old_level": old_level,
        "new_level": new_level,
        "total_stars": total_stars,
    }


def create_unlocked_event(unlocks: List[Dict[str, Any]]) -> EventPayload:
    """Create an unlocked event listing ``{"kind", "name"}`` entries."""
    return {
        "unlocks": unlocks,
    }
