"""Buddy's Treehouse - a virtual pet simulation core.

Buddy's needs decay over time, mood is derived from those needs, and
stars earned in activities level Buddy up and unlock new content.

Usage:
    from pathlib import Path
    from treehouse import BuddyStore, SnapshotStore

    store = BuddyStore(SnapshotStore(Path.home() / ".treehouse"))
    store.feed("apple")
    store.add_stars(10)
"""

from treehouse.core import BuddySnapshot, BuddyStore, Mood, TickScheduler, UnlockKind
from treehouse.systems.storage import MemorySnapshotStore, SnapshotStore

__version__ = "0.1.0"

__all__ = [
    "BuddySnapshot",
    "BuddyStore",
    "MemorySnapshotStore",
    "Mood",
    "SnapshotStore",
    "TickScheduler",
    "UnlockKind",
]
