"""
Unlock registry for Buddy's Treehouse.

Unlocks are one-way and idempotent: names are only ever added to a
collection, and adding a name that is already present changes nothing.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from treehouse.utils.logging import get_logger

if TYPE_CHECKING:
    from treehouse.core.models.state import BuddyState


logger = get_logger("unlocks")


class UnlockKind(str, Enum):
    """Collections that ``unlock`` can add to."""
    OUTFIT = "outfit"
    ACTIVITY = "activity"
    ITEM = "item"


_COLLECTIONS = {
    UnlockKind.OUTFIT: "unlocked_outfits",
    UnlockKind.ACTIVITY: "unlocked_activities",
    UnlockKind.ITEM: "unlocked_items",
}


class UnlockRegistry:
    """Set-union access to the state's unlock collections and badges."""

    def __init__(self, state: "BuddyState"):
        self.state = state

    def collection(self, kind: UnlockKind | str) -> set[str]:
        """Return the live set for ``kind``.

        Raises:
            ValueError: If ``kind`` is not a known unlock kind
        """
        return getattr(self.state, _COLLECTIONS[UnlockKind(kind)])

    def unlock(self, kind: UnlockKind | str, name: str) -> bool:
        """Add ``name`` to the ``kind`` collection.

        Returns:
            True if the collection grew, False if ``name`` was already there
        """
        items = self.collection(kind)
        if name in items:
            return False
        items.add(name)
        logger.info(f"Unlocked {UnlockKind(kind).value}: {name}")
        return True

    def is_unlocked(self, kind: UnlockKind | str, name: str) -> bool:
        return name in self.collection(kind)

    def award_badge(self, name: str) -> bool:
        """Add a badge. Returns True if it was newly earned."""
        if name in self.state.badges:
            return False
        self.state.badges.add(name)
        logger.info(f"Badge earned: {name}")
        return True
