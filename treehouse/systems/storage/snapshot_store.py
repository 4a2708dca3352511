"""
Snapshot persistence for Buddy's Treehouse.

The whole Buddy aggregate is stored as one JSON document under a fixed
storage key. Writes replace the full document; there is no partial or
incremental persistence. Loading never fails: a missing, unreadable or
malformed document means "no prior state".
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from treehouse.core.models.state import BuddyState
from treehouse.utils.logging import get_logger, log_operation


logger = get_logger("storage")

DEFAULT_STORAGE_KEY = "buddys-treehouse-storage"


def encode_snapshot(state: BuddyState) -> str:
    """Serialize state to the canonical JSON text (stable key order)."""
    return json.dumps(state.to_snapshot(), indent=2, sort_keys=True, ensure_ascii=False)


def decode_snapshot(text: str) -> BuddyState:
    """Parse canonical JSON text back into state.

    Raises:
        json.JSONDecodeError: If the text isn't JSON
        pydantic.ValidationError: If the document doesn't describe a state
    """
    data: Any = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Snapshot root must be an object, got {type(data).__name__}")
    return BuddyState.from_snapshot(data)


class SnapshotBackend(Protocol):
    """Anything that can hold one full snapshot."""

    def load(self) -> BuddyState | None: ...

    def save(self, state: BuddyState) -> None: ...


# ============================================================================
# File Snapshot Store
# ============================================================================


class SnapshotStore:
    """Stores the Buddy snapshot as ``<data_dir>/<storage_key>.json``.

    Usage:
        store = SnapshotStore(data_dir)
        state = store.load() or BuddyState.create()
        store.save(state)
    """

    def __init__(self, data_dir: str | Path, storage_key: str = DEFAULT_STORAGE_KEY):
        """Initialize the snapshot store.

        Args:
            data_dir: Directory holding the snapshot file
            storage_key: Name of the record (file stem)
        """
        self.data_dir = Path(data_dir)
        self.storage_key = storage_key

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.storage_key}.json"

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> BuddyState | None:
        """Read the stored snapshot.

        Returns:
            The stored state, or None if there is no usable snapshot
        """
        try:
            text = self.path.read_text(encoding="utf-8")
            state = decode_snapshot(text)
        except FileNotFoundError:
            logger.info(f"No snapshot at {self.path}; starting fresh")
            return None
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Snapshot at {self.path} unusable ({type(e).__name__}: {e}); starting fresh")
            return None

        log_operation(logger, "Loaded snapshot", {"path": self.path, "level": state.level})
        return state

    def save(self, state: BuddyState) -> None:
        """Replace the stored snapshot with ``state``.

        The document is written to a sibling temp file first and then moved
        into place, so readers only ever see a complete snapshot.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".json.tmp")

        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(encode_snapshot(state))
        os.replace(tmp_path, self.path)

        logger.debug(f"Saved snapshot to {self.path}")

    def clear(self) -> bool:
        """Delete the stored snapshot.

        Returns:
            True if deleted, False if there was none
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        return True


# ============================================================================
# In-Memory Snapshot Store
# ============================================================================


class MemorySnapshotStore:
    """Keeps the snapshot as JSON text in memory.

    Used by tests and by hosts that don't want disk persistence. The text
    goes through the same encoder as the file store.
    """

    def __init__(self, text: str | None = None):
        self.text = text
        self.saves = 0

    def load(self) -> BuddyState | None:
        if self.text is None:
            return None
        try:
            return decode_snapshot(self.text)
        except (ValueError, ValidationError) as e:
            logger.warning(f"In-memory snapshot unusable ({type(e).__name__}); starting fresh")
            return None

    def save(self, state: BuddyState) -> None:
        self.text = encode_snapshot(state)
        self.saves += 1
