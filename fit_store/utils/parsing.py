"""Parsing helpers for record input from files, stdin and CLI flags."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from fit_store.core.models import Exercise, ExerciseEntry, Workout

_ENTRY_RE = re.compile(
    r"^\s*(?P<exercise>[^:]+?)\s*:\s*(?P<sets>\d+)\s*[xX]\s*(?P<reps>\d+)"
    r"(?:\s*@\s*(?P<weight>\d+(?:\.\d+)?))?\s*$"
)
_TIMED_RE = re.compile(r"^\s*(?P<exercise>[^:]+?)\s*:\s*(?P<duration>\d+(?::\d{2}){0,2})\s*$")


def parse_duration(value: str) -> int:
    """Parse '90', '1:30' or '1:02:30' into seconds."""
    parts = [int(part) for part in value.strip().split(":")]
    seconds = 0
    for part in parts:
        seconds = seconds * 60 + part
    return seconds


def parse_entry(value: str) -> ExerciseEntry:
    """Parse compact entry text like 'squat:5x5@100' or 'plank:1:30'."""
    match = _ENTRY_RE.match(value)
    if match:
        weight = match.group("weight")
        return ExerciseEntry(
            exercise=match.group("exercise"),
            sets=int(match.group("sets")),
            reps=int(match.group("reps")),
            weight=float(weight) if weight is not None else None,
        )

    match = _TIMED_RE.match(value)
    if match:
        return ExerciseEntry(
            exercise=match.group("exercise"),
            duration_seconds=parse_duration(match.group("duration")),
        )

    raise ValueError(f"Cannot parse exercise entry {value!r}; expected NAME:SETSxREPS[@WEIGHT] or NAME:MM:SS")


class RecordInputError(ValueError):
    """Raised when a record file or stdin payload cannot be read or parsed."""


def _parse_record_text(text: str, file_path: Optional[Path]) -> Any:
    if file_path is not None:
        if file_path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(text)
        return json.loads(text)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return yaml.safe_load(text)


def load_record_input(file_path: Optional[Path], read_stdin: bool, stdin_text: str = "") -> List[Dict[str, Any]]:
    """Load record object(s) from file or stdin text."""
    source = str(file_path) if file_path else "stdin"
    try:
        if file_path:
            text = file_path.read_text(encoding="utf-8")
        elif read_stdin:
            text = stdin_text.strip()
            if not text:
                return []
        else:
            return []
        raw_data = _parse_record_text(text, file_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise RecordInputError(f"Could not load records from {source}: {exc}") from exc

    if isinstance(raw_data, dict):
        return [raw_data]
    if isinstance(raw_data, list):
        return [item for item in raw_data if isinstance(item, dict)]
    return []


def build_basic_workout(name: str, entries: Sequence[str] = (), description: str = "") -> Workout:
    """Build a workout from CLI flags."""
    return Workout(
        name=name,
        entries=[parse_entry(item) for item in entries],
        description=description,
    )


def build_basic_exercise(
    name: str,
    muscle_groups: Sequence[str] = (),
    equipment: Sequence[str] = (),
    description: str = "",
) -> Exercise:
    """Build an exercise definition from CLI flags."""
    return Exercise(
        name=name,
        muscle_groups=[item.strip().lower() for item in muscle_groups if item.strip()],
        equipment=[item.strip().lower() for item in equipment if item.strip()],
        description=description,
    )
