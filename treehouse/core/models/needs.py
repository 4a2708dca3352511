"""
Needs Model for Buddy's Treehouse.

Buddy's physical and emotional condition is three bounded gauges. Every
write to a gauge goes through ``clamp`` so no value ever leaves [0, 100].
The model is immutable: ``merge`` and ``adjust`` return a new instance.
Mood is not recomputed here; callers derive it from the returned needs.
"""

from __future__ import annotations

from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field


NEED_MIN = 0.0
NEED_MAX = 100.0

GAUGES = ("hunger", "energy", "happiness")


def clamp(value: float, floor: float = NEED_MIN, ceiling: float = NEED_MAX) -> float:
    """Clamp a gauge value into ``[floor, ceiling]``."""
    return max(floor, min(ceiling, float(value)))


class BuddyNeeds(BaseModel):
    """The three need gauges.

    Attributes:
        hunger: Satiety. Raised by feeding, lowered by time.
        energy: Stamina. Raised by sleeping, lowered by play and time.
        happiness: Affect. Raised by feeding, petting and play, lowered by time.
    """

    hunger: float = Field(default=80.0, ge=NEED_MIN, le=NEED_MAX, description="Satiety")
    energy: float = Field(default=90.0, ge=NEED_MIN, le=NEED_MAX, description="Stamina")
    happiness: float = Field(default=85.0, ge=NEED_MIN, le=NEED_MAX, description="Affect")

    model_config = ConfigDict(frozen=True)

    def merge(self, partial: Mapping[str, float]) -> "BuddyNeeds":
        """Overlay a partial update, clamping each touched gauge independently.

        Args:
            partial: Gauge name to new absolute value

        Returns:
            New needs instance

        Raises:
            ValueError: If ``partial`` names a gauge that doesn't exist
        """
        unknown = set(partial) - set(GAUGES)
        if unknown:
            raise ValueError(f"Unknown need gauge(s): {sorted(unknown)}")

        values = self.model_dump()
        for name, value in partial.items():
            values[name] = clamp(value)
        return BuddyNeeds(**values)

    def adjust(self, **deltas: float) -> "BuddyNeeds":
        """Add signed deltas to gauges and clamp each result."""
        unknown = set(deltas) - set(GAUGES)
        if unknown:
            raise ValueError(f"Unknown need gauge(s): {sorted(unknown)}")
        return self.merge({name: getattr(self, name) + delta for name, delta in deltas.items()})

    def decayed(self, hunger: float, energy: float, happiness: float,
                happiness_floor: float) -> "BuddyNeeds":
        """Apply one time-decay step.

        Happiness is floored at ``happiness_floor`` instead of zero.
        """
        return BuddyNeeds(
            hunger=clamp(self.hunger - hunger),
            energy=clamp(self.energy - energy),
            happiness=clamp(self.happiness - happiness, floor=happiness_floor),
        )
