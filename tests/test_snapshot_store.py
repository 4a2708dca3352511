"""Snapshot Store Tests.

Tests for the file-backed and in-memory snapshot stores.
"""

import json
import tempfile
import unittest
from pathlib import Path

from treehouse.core.models.needs import BuddyNeeds
from treehouse.core.models.state import BuddyState
from treehouse.core.store import BuddyStore
from treehouse.systems.storage.snapshot_store import (
    DEFAULT_STORAGE_KEY,
    MemorySnapshotStore,
    SnapshotStore,
    encode_snapshot,
)


class SnapshotStoreTest(unittest.TestCase):
    """Test SnapshotStore functionality."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name) / "buddy"
        self.snapshots = SnapshotStore(self.data_dir)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_path_uses_storage_key(self) -> None:
        self.assertEqual(self.snapshots.path, self.data_dir / f"{DEFAULT_STORAGE_KEY}.json")
        custom = SnapshotStore(self.data_dir, storage_key="other-buddy")
        self.assertEqual(custom.path.name, "other-buddy.json")

    def test_missing_snapshot_loads_none(self) -> None:
        self.assertFalse(self.snapshots.exists())
        self.assertIsNone(self.snapshots.load())

    def test_save_then_load_round_trip(self) -> None:
        state = BuddyState(
            needs=BuddyNeeds(hunger=12.5, energy=40, happiness=77),
            total_stars=130,
            level=3,
            unlocked_items={"lamp"},
            food_items={"apple": 0, "pizza": 2},
        )

        self.snapshots.save(state)
        loaded = self.snapshots.load()

        self.assertEqual(loaded, state)
        self.assertFalse(self.data_dir.joinpath(f"{DEFAULT_STORAGE_KEY}.json.tmp").exists())

    def test_saved_document_is_plain_json(self) -> None:
        self.snapshots.save(BuddyState.create())

        data = json.loads(self.snapshots.path.read_text(encoding="utf-8"))

        self.assertEqual(data["version"], 1)
        self.assertEqual(data["unlocked_outfits"], ["default"])
        self.assertEqual(data["toys"], ["ball"])
        self.assertIsNone(data["last_played"])
        self.assertNotIn("mood", data)

    def test_save_replaces_whole_document(self) -> None:
        self.snapshots.save(BuddyState(total_stars=10))
        self.snapshots.save(BuddyState(total_stars=20))

        self.assertEqual(self.snapshots.load().total_stars, 20)

    def test_corrupt_json_falls_back_to_none(self) -> None:
        self.data_dir.mkdir(parents=True)
        self.snapshots.path.write_text("{not json", encoding="utf-8")

        self.assertIsNone(self.snapshots.load())

    def test_invalid_values_fall_back_to_none(self) -> None:
        self.data_dir.mkdir(parents=True)
        self.snapshots.path.write_text(json.dumps({"needs": {"hunger": 500}}), encoding="utf-8")

        self.assertIsNone(self.snapshots.load())

    def test_non_object_root_falls_back_to_none(self) -> None:
        self.data_dir.mkdir(parents=True)
        self.snapshots.path.write_text("[1, 2, 3]", encoding="utf-8")

        self.assertIsNone(self.snapshots.load())

    def test_partial_document_fills_defaults(self) -> None:
        self.data_dir.mkdir(parents=True)
        self.snapshots.path.write_text(json.dumps({"total_stars": 60, "level": 2}), encoding="utf-8")

        state = self.snapshots.load()

        self.assertEqual(state.total_stars, 60)
        self.assertEqual(state.needs, BuddyNeeds())
        self.assertIn("letters", state.unlocked_activities)

    def test_baseline_unlocks_restored_from_sparse_lists(self) -> None:
        self.data_dir.mkdir(parents=True)
        self.snapshots.path.write_text(
            json.dumps({"unlocked_activities": ["shapes"], "unlocked_outfits": []}),
            encoding="utf-8",
        )

        state = self.snapshots.load()

        self.assertEqual(state.unlocked_activities, {"letters", "numbers", "colors", "shapes"})
        self.assertEqual(state.unlocked_outfits, {"default"})

    def test_unstattable_record_falls_back_to_none(self) -> None:
        self.data_dir.mkdir(parents=True)
        snapshots = SnapshotStore(self.data_dir, storage_key="k" * 300)

        self.assertIsNone(snapshots.load())

    def test_store_starts_fresh_when_record_is_unreachable(self) -> None:
        self.data_dir.mkdir(parents=True)
        store = BuddyStore(SnapshotStore(self.data_dir, storage_key="k" * 300))

        self.assertEqual(store.state, BuddyState.create())
        self.assertFalse(store.persist())

    def test_directory_in_place_of_record_falls_back_to_none(self) -> None:
        self.snapshots.path.mkdir(parents=True)

        self.assertIsNone(self.snapshots.load())

    def test_clear(self) -> None:
        self.snapshots.save(BuddyState.create())

        self.assertTrue(self.snapshots.clear())
        self.assertFalse(self.snapshots.clear())
        self.assertIsNone(self.snapshots.load())


class MemorySnapshotStoreTest(unittest.TestCase):
    """Test MemorySnapshotStore functionality."""

    def test_starts_empty(self) -> None:
        self.assertIsNone(MemorySnapshotStore().load())

    def test_round_trip_and_save_count(self) -> None:
        memory = MemorySnapshotStore()
        state = BuddyState(experience=12)

        memory.save(state)

        self.assertEqual(memory.saves, 1)
        self.assertEqual(memory.text, encode_snapshot(state))
        self.assertEqual(memory.load(), state)

    def test_unusable_text_loads_none(self) -> None:
        self.assertIsNone(MemorySnapshotStore("nope").load())


if __name__ == "__main__":
    unittest.main()
