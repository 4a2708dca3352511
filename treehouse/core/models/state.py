"""
Buddy State Aggregate for Buddy's Treehouse.

One ``BuddyState`` exists per installation. It holds needs, progression,
unlock collections and inventory. Mood is deliberately absent: it is derived
from ``needs`` and owned by the store, never persisted.

Collections are sets in memory and sorted lists on disk so snapshots are
stable byte for byte.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from treehouse.core.models.needs import BuddyNeeds


SNAPSHOT_VERSION = 1

DEFAULT_OUTFIT = "default"
DEFAULT_OUTFITS = frozenset({DEFAULT_OUTFIT})
DEFAULT_ACTIVITIES = frozenset({"letters", "numbers", "colors"})
STARTER_FOOD = {"apple": 3, "cookie": 2, "carrot": 5}
STARTER_TOYS = frozenset({"ball"})


def _starter_food() -> dict[str, int]:
    return dict(STARTER_FOOD)


class BuddyState(BaseModel):
    """The whole persisted simulation state.

    Attributes:
        needs: Hunger, energy and happiness gauges
        level: Current level, ``total_stars // 50 + 1``
        experience: Experience counter (no derived effects yet)
        total_stars: Lifetime stars earned
        current_streak: Consecutive-day play streak
        activities_completed: Number of finished activities
        last_played: When the most recent activity finished
        current_outfit: Outfit Buddy is wearing, always an unlocked one
        unlocked_outfits: Outfits available for selection
        unlocked_activities: Activities available for selection
        unlocked_items: Unlocked decorative items
        badges: Earned badges
        food_items: Food id to remaining count
        toys: Owned toys
    """

    version: int = Field(default=SNAPSHOT_VERSION, description="Snapshot schema version")

    needs: BuddyNeeds = Field(default_factory=BuddyNeeds)

    # Progression ledger
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    total_stars: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    activities_completed: int = Field(default=0, ge=0)
    last_played: datetime | None = None

    current_outfit: str = DEFAULT_OUTFIT

    # Collections
    unlocked_outfits: set[str] = Field(default_factory=lambda: set(DEFAULT_OUTFITS))
    unlocked_activities: set[str] = Field(default_factory=lambda: set(DEFAULT_ACTIVITIES))
    unlocked_items: set[str] = Field(default_factory=set)
    badges: set[str] = Field(default_factory=set)

    # Inventory
    food_items: dict[str, int] = Field(default_factory=_starter_food)
    toys: set[str] = Field(default_factory=lambda: set(STARTER_TOYS))

    model_config = ConfigDict(validate_assignment=True)

    @field_validator("unlocked_outfits")
    @classmethod
    def _keep_default_outfit(cls, value: set[str]) -> set[str]:
        return set(value) | DEFAULT_OUTFITS

    @field_validator("unlocked_activities")
    @classmethod
    def _keep_default_activities(cls, value: set[str]) -> set[str]:
        return set(value) | DEFAULT_ACTIVITIES

    @field_validator("food_items")
    @classmethod
    def _non_negative_counts(cls, value: dict[str, int]) -> dict[str, int]:
        return {food: max(0, int(count)) for food, count in value.items()}

    @field_serializer("unlocked_outfits", "unlocked_activities", "unlocked_items", "badges", "toys")
    def _sorted(self, value: set[str]) -> list[str]:
        return sorted(value)

    @classmethod
    def create(cls) -> "BuddyState":
        """Create a fresh aggregate with installation defaults."""
        return cls()

    def to_snapshot(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dict."""
        return self.model_dump(mode="json")

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> "BuddyState":
        """Restore from a dict produced by ``to_snapshot``.

        Raises:
            pydantic.ValidationError: If the snapshot is malformed
        """
        return cls.model_validate(data)
