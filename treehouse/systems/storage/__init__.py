"""Storage systems - durable Buddy snapshots."""

from treehouse.systems.storage.snapshot_store import (
    DEFAULT_STORAGE_KEY,
    MemorySnapshotStore,
    SnapshotBackend,
    SnapshotStore,
    decode_snapshot,
    encode_snapshot,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "MemorySnapshotStore",
    "SnapshotBackend",
    "SnapshotStore",
    "decode_snapshot",
    "encode_snapshot",
]
