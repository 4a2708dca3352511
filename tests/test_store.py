"""
Test Suite: Buddy Store

Tests for the single-writer store: invariants across operation sequences,
notifications, snapshots and save-after-mutate persistence.
"""
import json
import random

import pytest

from treehouse.core import events
from treehouse.core.models.mood import Mood, resolve_mood
from treehouse.core.models.needs import GAUGES
from treehouse.core.store import BuddyStore
from treehouse.core.transitions import MoodSource
from treehouse.systems.storage.snapshot_store import MemorySnapshotStore, SnapshotStore


# ========== Invariants ==========


def _random_operation(store: BuddyStore, rng: random.Random):
    choice = rng.randrange(9)
    if choice == 0:
        return store.feed(rng.choice(["apple", "cookie", "carrot", "pizza", "mystery"]))
    if choice == 1:
        return store.pet()
    if choice == 2:
        return store.play()
    if choice == 3:
        return store.sleep()
    if choice == 4:
        return store.tick()
    if choice == 5:
        gauge = rng.choice(GAUGES)
        return store.update_needs({gauge: rng.uniform(-50, 150)})
    if choice == 6:
        return store.add_stars(rng.randrange(0, 40))
    if choice == 7:
        return store.unlock(rng.choice(["outfit", "activity", "item"]), rng.choice(["a", "b", "c"]))
    return store.complete_activity(rng.choice(["letters", "numbers", "colors"]))


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_invariants_hold_after_every_step(seed):
    rng = random.Random(seed)
    store = BuddyStore(MemorySnapshotStore())
    override_active = False
    previous_level = store.state.level

    for _ in range(500):
        transition = _random_operation(store, rng)
        snap = store.snapshot()

        for gauge in GAUGES:
            assert 0.0 <= getattr(snap.needs, gauge) <= 100.0

        if transition.mood_source == MoodSource.OVERRIDE:
            override_active = True
        elif transition.mood_source == MoodSource.RESOLVED:
            override_active = False

        if override_active:
            assert snap.mood == Mood.HAPPY
        else:
            assert snap.mood == resolve_mood(snap.needs)

        assert snap.level == snap.total_stars // 50 + 1
        assert snap.level >= previous_level
        previous_level = snap.level

        assert all(count >= 0 for count in snap.state.food_items.values())
        assert {"letters", "numbers", "colors"} <= snap.state.unlocked_activities
        assert "default" in snap.state.unlocked_outfits


def test_fresh_store_mood_is_derived_from_default_needs(store):
    assert store.mood == resolve_mood(store.state.needs)


# ========== Snapshots ==========


def test_snapshot_is_detached_from_live_state(store):
    snap = store.snapshot()
    snap.state.unlocked_activities.add("hacked")

    assert "hacked" not in store.state.unlocked_activities


def test_snapshot_dict_includes_mood(store):
    data = store.snapshot().to_dict()

    assert data["mood"] == store.mood.value
    assert data["unlocked_activities"] == ["colors", "letters", "numbers"]


# ========== Notifications ==========


def test_state_changed_published_for_each_applied_action(store):
    seen = []
    store.subscribe(events.TOPIC_STATE_CHANGED, seen.append)

    store.pet()
    store.play()

    assert [p["transition"].kind.value for p in seen] == ["pet", "play"]
    assert seen[-1]["snapshot"].needs.energy == 85.0


def test_ignored_action_publishes_nothing(store):
    seen = []
    store.subscribe(events.TOPIC_STATE_CHANGED, seen.append)

    store.feed("pizza")
    store.wear_outfit("astronaut")

    assert seen == []


def test_mood_changed_event(store):
    seen = []
    store.subscribe(events.TOPIC_MOOD_CHANGED, seen.append)

    store.update_needs({"energy": 10})
    store.sleep()

    assert seen == [
        {"old_mood": "excited", "new_mood": "tired", "source": "resolved"},
        {"old_mood": "tired", "new_mood": "happy", "source": "override"},
    ]


def test_level_up_and_unlock_events(store):
    levels = []
    unlocks = []
    store.subscribe(events.TOPIC_LEVEL_UP, levels.append)
    store.subscribe(events.TOPIC_UNLOCKED, unlocks.append)

    store.add_stars(10)
    store.add_stars(110)
    store.unlock("activity", "shapes")

    assert levels == [{"old_level": 1, "new_level": 3, "total_stars": 120}]
    assert unlocks == [{"unlocks": [{"kind": "activity", "name": "shapes"}]}]


def test_unsubscribe_stops_delivery(store):
    seen = []
    store.subscribe(events.TOPIC_STATE_CHANGED, seen.append)
    store.unsubscribe(events.TOPIC_STATE_CHANGED, seen.append)

    store.pet()

    assert seen == []


def test_failing_subscriber_does_not_break_the_store(store):
    def explode(payload):
        raise RuntimeError("boom")

    store.subscribe(events.TOPIC_STATE_CHANGED, explode)

    store.play()

    assert store.snapshot().needs.energy == 85.0


# ========== Persistence ==========


def test_every_change_writes_a_snapshot(store, backend):
    store.pet()
    store.add_stars(3)
    store.unlock("item", "lamp")

    assert backend.saves == 3
    assert json.loads(backend.text)["unlocked_items"] == ["lamp"]


def test_persisted_snapshot_has_no_mood(store, backend):
    store.play()

    data = json.loads(backend.text)

    assert "mood" not in data
    assert data["needs"] == {"hunger": 80.0, "energy": 85.0, "happiness": 95.0}


def test_state_survives_restart(tmp_path, fixed_now):
    first = BuddyStore(SnapshotStore(tmp_path), clock=lambda: fixed_now)
    first.feed("carrot")
    first.add_stars(120)
    first.unlock("outfit", "pirate")
    first.wear_outfit("pirate")
    first.award_badge("explorer")
    first.complete_activity("letters")
    first.add_experience(30)

    second = BuddyStore(SnapshotStore(tmp_path))

    assert second.state == first.state
    assert second.state.food_items["carrot"] == 4
    assert second.state.level == 3
    assert second.is_activity_unlocked("shapes")
    assert second.state.current_outfit == "pirate"
    assert second.state.last_played == fixed_now


def test_mood_is_recomputed_on_load(tmp_path):
    first = BuddyStore(SnapshotStore(tmp_path))
    first.update_needs({"hunger": 10})
    first.sleep()
    assert first.mood == Mood.HAPPY

    second = BuddyStore(SnapshotStore(tmp_path))

    assert second.mood == Mood.HUNGRY


class _BrokenBackend:
    def load(self):
        return None

    def save(self, state):
        raise OSError("disk full")


def test_save_failure_keeps_in_memory_state():
    store = BuddyStore(_BrokenBackend())

    store.play()

    assert store.snapshot().needs.energy == 85.0
    assert store.persist() is False


def test_fresh_store_starts_excited(store):
    assert store.mood == Mood.EXCITED
