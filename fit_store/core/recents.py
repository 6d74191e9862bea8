"""Bounded, most-recent-first history of workouts."""

from __future__ import annotations

import copy
import json
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from fit_store.core.models import as_record

DEFAULT_MAX_RECENTS = 10


def check_max_size(max_size: Any) -> int:
    if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size < 1:
        raise ValueError(f"max_size must be a positive integer, got {max_size!r}")
    return max_size


def _entry_name(entry: Mapping[str, Any]) -> str:
    name = entry.get("name")
    if not isinstance(name, str):
        raise ValueError("Recent workout entries require a string 'name'")
    return name


class RecentsQueue:
    """Recency-ordered workouts, deduplicated by name and capped at ``max_size``.

    Index 0 is always the most recently added workout. Loading, adding and
    serializing all use that order, so ``RecentsQueue.from_list(q.to_list())``
    reproduces ``q``.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_RECENTS,
        entries: Optional[Iterable[Mapping[str, Any]]] = None,
    ) -> None:
        self._max_size = check_max_size(max_size)
        self._entries: List[Dict[str, Any]] = []

        seen = set()
        for raw in entries or []:
            if not isinstance(raw, Mapping):
                raise ValueError(f"Recent workout entries must be objects, got {type(raw).__name__}")
            name = _entry_name(raw)
            if name in seen:
                continue
            seen.add(name)
            self._entries.append(copy.deepcopy(dict(raw)))
            if len(self._entries) == max_size:
                break

    @classmethod
    def from_list(
        cls,
        entries: Iterable[Mapping[str, Any]],
        max_size: int = DEFAULT_MAX_RECENTS,
    ) -> "RecentsQueue":
        return cls(max_size=max_size, entries=entries)

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def entries(self) -> Tuple[Dict[str, Any], ...]:
        return tuple(copy.deepcopy(self._entries))

    def names(self) -> List[str]:
        return [entry["name"] for entry in self._entries]

    def add(self, workout: Any) -> Optional[Dict[str, Any]]:
        """Push ``workout`` to the front, returning the evicted entry if any."""
        record = copy.deepcopy(as_record(workout))
        name = _entry_name(record)
        self._entries = [entry for entry in self._entries if entry["name"] != name]
        self._entries.insert(0, record)

        evicted: Optional[Dict[str, Any]] = None
        while len(self._entries) > self._max_size:
            evicted = self._entries.pop()
        return evicted

    def remove(self, name: str) -> bool:
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry["name"] != name]
        return len(self._entries) != before

    def clear(self) -> None:
        self._entries = []

    def to_list(self) -> List[Dict[str, Any]]:
        """Serializable copy of the entries, most recent first."""
        return copy.deepcopy(self._entries)

    def to_json(self) -> str:
        return json.dumps(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.entries)

    def __contains__(self, name: object) -> bool:
        return any(entry["name"] == name for entry in self._entries)

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"RecentsQueue(max_size={self._max_size}, names={self.names()!r})"
