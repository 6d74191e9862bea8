"""Lightweight record models for workouts and exercises."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional


def as_record(value: Any) -> Dict[str, Any]:
    """Return a plain dict for a mapping or an object exposing ``to_dict()``."""
    if isinstance(value, Mapping):
        return dict(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        data = to_dict()
        if isinstance(data, Mapping):
            return dict(data)
    raise TypeError(f"Unsupported record type: {type(value)!r}")


def _require_name(data: Mapping[str, Any], kind: str) -> str:
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"{kind} record requires a non-empty 'name'")
    return name


@dataclass
class ExerciseEntry:
    """One exercise as performed inside a workout."""

    exercise: str
    sets: int = 1
    reps: int = 0
    weight: Optional[float] = None
    duration_seconds: Optional[int] = None
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExerciseEntry":
        exercise = data.get("exercise") or data.get("name")
        if not isinstance(exercise, str) or not exercise.strip():
            raise ValueError("Exercise entry requires an 'exercise' name")
        weight = data.get("weight")
        duration = data.get("duration_seconds")
        return cls(
            exercise=exercise,
            sets=int(data.get("sets", 1)),
            reps=int(data.get("reps", 0)),
            weight=float(weight) if weight is not None else None,
            duration_seconds=int(duration) if duration is not None else None,
            notes=str(data.get("notes") or ""),
        )


@dataclass
class Workout:
    """Named, ordered list of exercise entries."""

    name: str
    entries: List[ExerciseEntry] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "entries": [entry.to_dict() for entry in self.entries],
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Workout":
        name = _require_name(data, "Workout")
        raw_entries = data.get("entries") or []
        return cls(
            name=name,
            entries=[ExerciseEntry.from_dict(item) for item in raw_entries if isinstance(item, Mapping)],
            description=str(data.get("description") or ""),
        )


@dataclass
class Exercise:
    """Exercise definition from the exercise library."""

    name: str
    muscle_groups: List[str] = field(default_factory=list)
    equipment: List[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Exercise":
        name = _require_name(data, "Exercise")
        return cls(
            name=name,
            muscle_groups=[str(item) for item in data.get("muscle_groups") or []],
            equipment=[str(item) for item in data.get("equipment") or []],
            description=str(data.get("description") or ""),
        )
