"""
Simulation rules for Buddy's Treehouse.

Numeric effects of every action, the time-decay step, and the
level-indexed unlock table.
"""

from __future__ import annotations

from treehouse.core.unlocks import UnlockKind


# ============================================================================
# Care Actions
# ============================================================================

# Hunger restored per food id
FOOD_VALUES: dict[str, float] = {
    "apple": 15,
    "cookie": 10,
    "carrot": 12,
    "pizza": 20,
}
DEFAULT_FOOD_VALUE = 10.0
FEED_HAPPINESS_BONUS = 5.0

PET_HAPPINESS = 3.0

PLAY_HAPPINESS = 10.0
PLAY_ENERGY_COST = 5.0

SLEEP_ENERGY = 100.0


# ============================================================================
# Time Decay (per tick)
# ============================================================================

DECAY_HUNGER = 0.5
DECAY_ENERGY = 0.3
DECAY_HAPPINESS = 0.2

# Decay never pushes happiness below this; actions may still reach zero.
DECAY_HAPPINESS_FLOOR = 20.0

DEFAULT_TICK_INTERVAL_SECONDS = 60.0


# ============================================================================
# Progression
# ============================================================================

STARS_PER_LEVEL = 50

# Level reached -> unlocks granted on the transition into that level
LEVEL_UNLOCKS: dict[int, tuple[tuple[UnlockKind, str], ...]] = {
    3: ((UnlockKind.ACTIVITY, "shapes"),),
    5: ((UnlockKind.ACTIVITY, "math"),),
}


def food_value(food_id: str) -> float:
    """Hunger restored by one serving of ``food_id``."""
    return float(FOOD_VALUES.get(food_id, DEFAULT_FOOD_VALUE))


def level_for_stars(total_stars: int) -> int:
    """Level implied by a lifetime star total."""
    return total_stars // STARS_PER_LEVEL + 1
