import logging
from datetime import UTC, datetime

import pytest

from treehouse.core.models.needs import BuddyNeeds
from treehouse.core.models.state import BuddyState
from treehouse.core.store import BuddyStore
from treehouse.systems.storage.snapshot_store import MemorySnapshotStore, encode_snapshot


FIXED_NOW = datetime(2026, 10, 19, 12, 30, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _reset_treehouse_logging():
    """CLI tests attach handlers to the treehouse logger; drop them afterwards."""
    yield
    logger = logging.getLogger("treehouse")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


@pytest.fixture
def backend() -> MemorySnapshotStore:
    return MemorySnapshotStore()


@pytest.fixture
def store(backend) -> BuddyStore:
    return BuddyStore(backend, clock=lambda: FIXED_NOW)


@pytest.fixture
def make_store():
    """Factory for stores whose persisted state starts from the given fields."""

    def _make(**fields) -> BuddyStore:
        if isinstance(fields.get("needs"), dict):
            fields["needs"] = BuddyNeeds(**fields["needs"])
        backend = MemorySnapshotStore(encode_snapshot(BuddyState(**fields)))
        return BuddyStore(backend, clock=lambda: FIXED_NOW)

    return _make


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
