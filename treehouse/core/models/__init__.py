"""
Core Models - needs gauges, mood derivation and the Buddy state aggregate.
"""

from treehouse.core.models.mood import Mood, resolve_mood
from treehouse.core.models.needs import GAUGES, NEED_MAX, NEED_MIN, BuddyNeeds, clamp
from treehouse.core.models.state import (
    DEFAULT_ACTIVITIES,
    DEFAULT_OUTFIT,
    DEFAULT_OUTFITS,
    SNAPSHOT_VERSION,
    STARTER_FOOD,
    STARTER_TOYS,
    BuddyState,
)

__all__ = [
    "BuddyNeeds",
    "BuddyState",
    "DEFAULT_ACTIVITIES",
    "DEFAULT_OUTFIT",
    "DEFAULT_OUTFITS",
    "GAUGES",
    "Mood",
    "NEED_MAX",
    "NEED_MIN",
    "SNAPSHOT_VERSION",
    "STARTER_FOOD",
    "STARTER_TOYS",
    "clamp",
    "resolve_mood",
]
