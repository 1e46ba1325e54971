import random

import pytest

from asphalt_viewer.model.station_store import DUPLICATE_OFFSET_M, StationStore
from asphalt_viewer.model.validation import ValidationError
from asphalt_core.model import Station


def _positions(store):
    return [s.station for s in store.stations]


def test_add_keeps_stations_sorted_by_position():
    store = StationStore()
    store.add(25, 2.8)
    store.add("0", "2.5")
    store.add(10.5, 3.2)

    assert _positions(store) == [0.0, 10.5, 25.0]
    assert [s.id for s in store.stations] == [2, 3, 1]


def test_add_accepts_comma_decimal_separator():
    store = StationStore()
    created = store.add("12,5", "3,0")

    assert created.station == 12.5
    assert created.width == 3.0


@pytest.mark.parametrize(
    "station, width",
    [("", 2.0), ("abc", 2.0), (1.0, ""), (1.0, 0), (1.0, -2.5), (float("nan"), 1.0)],
)
def test_add_rejects_invalid_input_and_leaves_store_unchanged(station, width):
    store = StationStore([Station(id=1, station=0.0, width=2.0)])

    with pytest.raises(ValidationError):
        store.add(station, width)

    assert len(store) == 1
    assert store.add(5, 2).id == 2


def test_update_position_resorts_and_keeps_id():
    store = StationStore()
    first = store.add(0, 2.5)
    store.add(10, 3.0)
    store.add(20, 3.5)

    moved = store.update(first.id, "station", 15)

    assert moved.id == first.id
    assert _positions(store) == [10.0, 15.0, 20.0]
    assert store.get(first.id).station == 15.0


def test_update_width_keeps_order():
    store = StationStore()
    a = store.add(0, 2.5)
    b = store.add(10, 3.0)

    store.update(b.id, "width", "4.25")

    assert [s.id for s in store.stations] == [a.id, b.id]
    assert store.get(b.id).width == 4.25


def test_update_rejects_non_positive_width():
    store = StationStore()
    created = store.add(0, 2.5)

    with pytest.raises(ValidationError):
        store.update(created.id, "width", 0)

    assert store.get(created.id).width == 2.5


def test_update_unknown_field_raises():
    store = StationStore()
    created = store.add(0, 2.5)

    with pytest.raises(ValueError):
        store.update(created.id, "height", 1)


def test_update_missing_station_raises_key_error():
    with pytest.raises(KeyError):
        StationStore().update(99, "station", 1)


def test_delete_removes_station():
    store = StationStore()
    a = store.add(0, 2.5)
    b = store.add(10, 3.0)

    removed = store.delete(a.id)

    assert removed == a
    assert store.stations == [b]


def test_duplicate_after_adds_offset_station_with_same_width():
    store = StationStore()
    a = store.add(0, 2.5)
    store.add(20, 3.0)

    copy = store.duplicate_after(a.id)

    assert copy.station == 0 + DUPLICATE_OFFSET_M
    assert copy.width == 2.5
    assert copy.id != a.id
    assert _positions(store) == [0.0, 5.0, 20.0]


def test_ids_continue_after_existing_stations():
    store = StationStore([Station(id=7, station=3.0, width=1.0)])

    assert store.add(4, 1).id == 8


def test_random_edits_keep_stations_sorted():
    rng = random.Random(1234)
    store = StationStore()
    for _ in range(200):
        ids = [s.id for s in store.stations]
        action = rng.choice(["add", "move", "width", "duplicate"]) if ids else "add"
        if action == "add":
            store.add(rng.uniform(0, 100), rng.uniform(0.5, 6))
        elif action == "move":
            store.update(rng.choice(ids), "station", rng.uniform(0, 100))
        elif action == "width":
            store.update(rng.choice(ids), "width", rng.uniform(0.5, 6))
        else:
            store.duplicate_after(rng.choice(ids))

        positions = _positions(store)
        assert positions == sorted(positions)
