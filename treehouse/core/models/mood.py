"""
Mood derivation for Buddy's Treehouse.

Mood is a display label derived from needs. It is never stored on its own;
it is recomputed from the needs snapshot it describes.
"""

from __future__ import annotations

from enum import Enum

from treehouse.core.models.needs import BuddyNeeds


# Rule thresholds, checked in order
TIRED_BELOW = 20.0
HUNGRY_BELOW = 30.0
SAD_BELOW = 40.0
EXCITED_ABOVE = 80.0


class Mood(str, Enum):
    """Buddy's discrete emotional state."""
    HAPPY = "happy"
    SAD = "sad"
    TIRED = "tired"
    HUNGRY = "hungry"
    EXCITED = "excited"


def resolve_mood(needs: BuddyNeeds) -> Mood:
    """Derive the mood for a needs snapshot.

    First matching rule wins: a Buddy that is both exhausted and starving
    reads as tired, never hungry.
    """
    if needs.energy < TIRED_BELOW:
        return Mood.TIRED
    if needs.hunger < HUNGRY_BELOW:
        return Mood.HUNGRY
    if needs.happiness < SAD_BELOW:
        return Mood.SAD
    if needs.happiness > EXCITED_ABOVE:
        return Mood.EXCITED
    return Mood.HAPPY
