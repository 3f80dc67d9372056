"""
Unit tests for EntityStore.

Covers id assignment, ordering, cascading deletes, persistence side effects
and startup fallbacks.
"""

import json

import pytest

from watch_tracker.adapters.json_store import InMemoryStore
from watch_tracker.components.store import (
    DEFAULT_ITEMS_KEY,
    DEFAULT_WEAR_KEY,
    ITEMS,
    WEAR_LOGS,
    EntityStore,
    StoreChange,
    WatchPatch,
    WearLogPatch,
)
from watch_tracker.domain.entities import WatchItem, WearLog
from watch_tracker.domain.errors import NotFoundError, ValidationError


def _watch(model: str = "Seiko 5", **kwargs) -> WatchItem:
    return WatchItem(model=model, **kwargs)


# --- Add ---


def test_add_watch_assigns_fresh_id(store: EntityStore):
    given = _watch(id="caller-chosen")
    stored = store.add_watch(given)

    assert stored.id != "caller-chosen"
    assert store.get_watch(stored.id).model == "Seiko 5"


def test_add_prepends(store: EntityStore):
    first = store.add_watch(_watch("First"))
    second = store.add_watch(_watch("Second"))

    assert [w.id for w in store.watches] == [second.id, first.id]


def test_add_wear_log_prepends(store: EntityStore):
    watch = store.add_watch(_watch())
    a = store.add_wear_log(WearLog(watch_id=watch.id, start="2024-01-01T10:00:00+00:00"))
    b = store.add_wear_log(WearLog(watch_id=watch.id, start="2024-01-02T10:00:00+00:00"))

    assert [log.id for log in store.wear_logs] == [b.id, a.id]


def test_prepend_wear_logs_keeps_given_order(store: EntityStore):
    watch = store.add_watch(_watch())
    existing = store.add_wear_log(WearLog(watch_id=watch.id, start="2024-01-01T10:00:00"))
    added = store.prepend_wear_logs(
        [
            WearLog(watch_id=watch.id, start="2024-02-01T10:00:00"),
            WearLog(watch_id=watch.id, start="2024-02-02T10:00:00"),
        ]
    )

    assert [log.start for log in store.wear_logs] == [
        "2024-02-01T10:00:00",
        "2024-02-02T10:00:00",
        "2024-01-01T10:00:00",
    ]
    assert existing.id not in {log.id for log in added}


# --- Update ---


def test_update_watch_applies_only_set_fields(store: EntityStore):
    watch = store.add_watch(_watch(purchase_price=100, notes="box and papers"))
    updated = store.update_watch(watch.id, WatchPatch(parts_cost=25))

    assert updated.parts_cost == 25
    assert updated.purchase_price == 100
    assert updated.notes == "box and papers"


def test_update_watch_none_clears_field(store: EntityStore):
    watch = store.add_watch(_watch(notes="box and papers"))
    updated = store.update_watch(watch.id, WatchPatch(notes=None))

    assert updated.notes is None


def test_update_unknown_watch_raises(store: EntityStore):
    with pytest.raises(NotFoundError) as exc:
        store.update_watch("missing", WatchPatch(model="x"))

    assert exc.value.code == "watch_not_found"


def test_update_rejects_invalid_values(store: EntityStore):
    watch = store.add_watch(_watch())

    with pytest.raises(ValidationError):
        store.update_watch(watch.id, WatchPatch(purchase_price=-1))

    assert store.get_watch(watch.id).purchase_price == 0


def test_update_keeps_position(store: EntityStore):
    a = store.add_watch(_watch("A"))
    b = store.add_watch(_watch("B"))
    store.update_watch(a.id, WatchPatch(model="A2"))

    assert [w.model for w in store.watches] == ["B", "A2"]
    assert store.watches[0].id == b.id


def test_update_wear_log_can_reopen(store: EntityStore):
    watch = store.add_watch(_watch())
    log = store.add_wear_log(
        WearLog(watch_id=watch.id, start="2024-01-01T10:00:00", end="2024-01-01T12:00:00")
    )
    reopened = store.update_wear_log(log.id, WearLogPatch(end=None))

    assert reopened.end is None
    assert reopened.start == "2024-01-01T10:00:00"


# --- Remove ---


def test_remove_watch_cascades_to_wear_logs(store: EntityStore):
    keep = store.add_watch(_watch("Keep"))
    gone = store.add_watch(_watch("Gone"))
    store.add_wear_log(WearLog(watch_id=gone.id, start="2024-01-01T10:00:00"))
    kept_log = store.add_wear_log(WearLog(watch_id=keep.id, start="2024-01-02T10:00:00"))
    store.add_wear_log(WearLog(watch_id=gone.id, start="2024-01-03T10:00:00"))

    store.remove_watch(gone.id)

    assert [w.id for w in store.watches] == [keep.id]
    assert [log.id for log in store.wear_logs] == [kept_log.id]


def test_remove_unknown_wear_log_raises(store: EntityStore):
    with pytest.raises(NotFoundError):
        store.remove_wear_log("missing")


def test_clear_wear_logs_leaves_watches(store: EntityStore):
    watch = store.add_watch(_watch())
    store.add_wear_log(WearLog(watch_id=watch.id, start="2024-01-01T10:00:00"))

    assert store.clear_wear_logs() == 1
    assert store.wear_logs == ()
    assert len(store.watches) == 1


# --- Persistence ---


def test_every_mutation_persists_touched_collection(kv: InMemoryStore, store: EntityStore):
    watch = store.add_watch(_watch())
    assert kv.writes == [DEFAULT_ITEMS_KEY]

    store.add_wear_log(WearLog(watch_id=watch.id, start="2024-01-01T10:00:00"))
    assert kv.writes[-1] == DEFAULT_WEAR_KEY

    saved = json.loads(kv.data[DEFAULT_ITEMS_KEY])
    assert saved[0]["model"] == "Seiko 5"
    assert saved[0]["purchasePrice"] == 0
    assert "purchase_price" not in saved[0]


def test_remove_watch_persists_both(kv: InMemoryStore, store: EntityStore):
    watch = store.add_watch(_watch())
    kv.writes.clear()

    store.remove_watch(watch.id)

    assert set(kv.writes) == {DEFAULT_ITEMS_KEY, DEFAULT_WEAR_KEY}


def test_listener_sees_applied_state(store: EntityStore):
    seen: list[tuple[StoreChange, int]] = []
    store.subscribe(lambda change: seen.append((change, len(store.watches))))

    store.add_watch(_watch())

    change, count = seen[0]
    assert change.action == "add_watch"
    assert change.collections == frozenset({ITEMS})
    assert count == 1


def test_replace_all_is_one_mutation(store: EntityStore):
    seen: list[StoreChange] = []
    store.subscribe(seen.append)
    watch = _watch()

    store.replace_all([watch], [WearLog(watch_id=watch.id, start="2024-01-01T10:00:00")])

    assert len(seen) == 1
    assert seen[0].collections == frozenset({ITEMS, WEAR_LOGS})


def test_snapshot_is_not_affected_by_later_mutations(store: EntityStore):
    store.add_watch(_watch("A"))
    snapshot = store.snapshot()

    store.add_watch(_watch("B"))

    assert [w.model for w in snapshot.watches] == ["A"]


# --- Load ---


def test_load_round_trips_persisted_data(kv: InMemoryStore, store: EntityStore):
    watch = store.add_watch(_watch(sold_price=200, status="Sold", date_sold="2024-05-01"))
    store.add_wear_log(WearLog(watch_id=watch.id, start="2024-01-01T10:00:00"))

    reloaded = EntityStore(kv)
    snapshot = reloaded.load()

    assert snapshot.watches == store.watches
    assert snapshot.wear_logs == store.wear_logs


def test_load_missing_keys_gives_empty_collections():
    snapshot = EntityStore(InMemoryStore()).load()

    assert snapshot.watches == ()
    assert snapshot.wear_logs == ()


@pytest.mark.parametrize("raw", ["{not json", '{"an": "object"}', '[{"model": 5}]'])
def test_load_corrupt_key_falls_back_to_empty(raw: str):
    valid_logs = json.dumps([{"id": "l1", "watchId": "w1", "start": "2024-01-01T10:00:00"}])
    kv = InMemoryStore({DEFAULT_ITEMS_KEY: raw, DEFAULT_WEAR_KEY: valid_logs})

    snapshot = EntityStore(kv).load()

    assert snapshot.watches == ()
    assert len(snapshot.wear_logs) == 1


def test_custom_keys(kv: InMemoryStore):
    store = EntityStore(kv, items_key="items", wear_key="wear")
    store.add_watch(_watch())

    assert "items" in kv.data


class UnreadableStore(InMemoryStore):
    """Key-value store whose items key cannot be decoded."""

    def get(self, key: str) -> str | None:
        if key == DEFAULT_ITEMS_KEY:
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        return super().get(key)


def test_load_undecodable_key_falls_back_to_empty():
    valid_logs = json.dumps([{"id": "l1", "watchId": "w1", "start": "2024-01-01T10:00:00"}])
    kv = UnreadableStore({DEFAULT_WEAR_KEY: valid_logs})

    snapshot = EntityStore(kv).load()

    assert snapshot.watches == ()
    assert len(snapshot.wear_logs) == 1
