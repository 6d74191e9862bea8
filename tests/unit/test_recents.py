from __future__ import annotations

import json
from typing import Any, Dict

import pytest

from fit_store.core.models import Workout
from fit_store.core.recents import DEFAULT_MAX_RECENTS, RecentsQueue


def _w(name: str, **extra: Any) -> Dict[str, Any]:
    return {"name": name, "entries": [], **extra}


def test_default_capacity_is_ten() -> None:
    assert RecentsQueue().max_size == DEFAULT_MAX_RECENTS == 10


@pytest.mark.parametrize("bad", [0, -1, 2.5, "3", True, None])
def test_invalid_max_size_raises(bad: Any) -> None:
    with pytest.raises(ValueError):
        RecentsQueue(max_size=bad)


def test_add_puts_newest_first() -> None:
    queue = RecentsQueue(3)
    queue.add(_w("squat"))
    queue.add(_w("bench"))
    assert queue.names() == ["bench", "squat"]


def test_scenario_duplicate_promoted_to_front() -> None:
    queue = RecentsQueue(3)
    for name in ["squat", "bench", "row", "squat"]:
        queue.add(_w(name))
    assert queue.names() == ["squat", "row", "bench"]
    assert len(queue) == 3


def test_duplicate_does_not_grow_queue_and_replaces_record() -> None:
    queue = RecentsQueue(5)
    queue.add(_w("squat", description="old"))
    queue.add(_w("bench"))
    queue.add(_w("squat", description="new"))
    assert len(queue) == 2
    assert queue.entries[0] == _w("squat", description="new")


def test_dedup_is_by_name_not_equality() -> None:
    queue = RecentsQueue(5)
    queue.add({"name": "squat", "entries": [{"exercise": "a"}]})
    queue.add({"name": "squat", "entries": [{"exercise": "b"}]})
    assert len(queue) == 1
    assert queue.entries[0]["entries"] == [{"exercise": "b"}]


def test_eviction_drops_oldest_and_returns_it() -> None:
    queue = RecentsQueue(2)
    assert queue.add(_w("a")) is None
    assert queue.add(_w("b")) is None
    evicted = queue.add(_w("c"))
    assert evicted == _w("a")
    assert queue.names() == ["c", "b"]


def test_size_is_min_of_capacity_and_distinct_names() -> None:
    sequence = ["a", "b", "a", "c", "d", "b", "e", "a", "f"]
    for capacity in range(1, 8):
        queue = RecentsQueue(capacity)
        for name in sequence:
            queue.add(_w(name))
            assert len(queue) <= capacity
        assert len(queue) == min(capacity, len(set(sequence)))
        assert len(set(queue.names())) == len(queue)


def test_add_accepts_model_objects() -> None:
    queue = RecentsQueue(3)
    queue.add(Workout(name="legs"))
    assert queue.to_list() == [{"name": "legs", "entries": [], "description": ""}]


def test_add_rejects_record_without_name() -> None:
    queue = RecentsQueue(3)
    with pytest.raises(ValueError):
        queue.add({"entries": []})


def test_construct_truncates_to_most_recent() -> None:
    queue = RecentsQueue(2, [_w("a"), _w("b"), _w("c")])
    assert queue.names() == ["a", "b"]


def test_construct_drops_later_duplicates() -> None:
    queue = RecentsQueue(3, [_w("a", description="recent"), _w("b"), _w("a", description="stale")])
    assert queue.names() == ["a", "b"]
    assert queue.entries[0]["description"] == "recent"


def test_construct_rejects_non_object_entries() -> None:
    with pytest.raises(ValueError):
        RecentsQueue(3, ["squat"])  # type: ignore[list-item]


def test_empty_queue_serializes_to_empty_array() -> None:
    queue = RecentsQueue(4)
    assert queue.to_list() == []
    assert queue.to_json() == "[]"
    assert str(queue) == "[]"
    restored = RecentsQueue.from_list(json.loads(queue.to_json()), max_size=4)
    assert len(restored) == 0
    assert restored.max_size == 4


def test_serialized_order_matches_recency() -> None:
    queue = RecentsQueue(3)
    queue.add(_w("a"))
    queue.add(_w("b"))
    assert [entry["name"] for entry in json.loads(queue.to_json())] == ["b", "a"]
    restored = RecentsQueue.from_list(queue.to_list(), max_size=3)
    assert restored.names() == ["b", "a"]


def test_to_list_returns_copies() -> None:
    queue = RecentsQueue(3, [_w("a")])
    snapshot = queue.to_list()
    snapshot[0]["name"] = "changed"
    assert queue.names() == ["a"]


def test_entries_and_iteration_return_copies() -> None:
    queue = RecentsQueue(3, [_w("a"), _w("b")])
    queue.entries[1]["name"] = "a"
    for entry in queue:
        entry["name"] = "z"
    assert queue.names() == ["a", "b"]
    queue.add(_w("c"))
    assert queue.names() == ["c", "a", "b"]


def test_queue_does_not_share_caller_records() -> None:
    loaded = [_w("a", tags=["legs"])]
    queue = RecentsQueue(3, loaded)
    loaded[0]["tags"].append("push")
    loaded[0]["name"] = "renamed"

    added = _w("b", tags=["pull"])
    queue.add(added)
    added["tags"].append("extra")

    assert queue.names() == ["b", "a"]
    assert [entry["tags"] for entry in queue.to_list()] == [["pull"], ["legs"]]


def test_remove_and_clear() -> None:
    queue = RecentsQueue(3, [_w("a"), _w("b")])
    assert queue.remove("a") is True
    assert queue.remove("missing") is False
    assert queue.names() == ["b"]
    assert "b" in queue
    queue.clear()
    assert len(queue) == 0
    assert list(queue) == []
