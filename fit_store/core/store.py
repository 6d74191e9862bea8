"""Filesystem facade for workout, exercise and recent-workout records."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fit_store.core.constants import (
    DEFAULT_EXERCISE_DIR,
    DEFAULT_RECENTS_FILE,
    DEFAULT_WORKOUT_DIR,
    RECORD_SUFFIX,
)
from fit_store.core.models import as_record
from fit_store.core.recents import DEFAULT_MAX_RECENTS, RecentsQueue, check_max_size
from fit_store.utils.text import name_problem

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class StoreError(RuntimeError):
    """Base class for storage facade failures."""


class InvalidNameError(StoreError, ValueError):
    """Raised when a record name cannot be used as a file name."""


class CorruptRecordError(StoreError):
    """Raised when a stored file exists but does not parse."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Corrupt record at {path}: {reason}")
        self.path = path


class RecordWriteError(StoreError):
    """Raised by strict writes when the record could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a record write."""

    path: Path
    ok: bool = True
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


def check_name(name: Any) -> str:
    problem = name_problem(name)
    if problem:
        raise InvalidNameError(problem)
    return name


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CorruptRecordError(path, str(exc)) from exc


class EntityStore:
    """One directory of ``<name>.json`` records of a single kind."""

    def __init__(self, kind: str, directory: PathLike, raise_on_write_error: bool = False) -> None:
        self.kind = kind
        self.directory = Path(directory)
        self.raise_on_write_error = raise_on_write_error
        if not self.directory.exists():
            logger.debug("Creating %s directory %s", kind, self.directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self.directory / f"{check_name(name)}{RECORD_SUFFIX}"

    def write(self, record: Any, strict: Optional[bool] = None) -> WriteResult:
        """Serialize ``record`` to ``<dir>/<name>.json``, overwriting any existing file."""
        data = as_record(record)
        path = self.path_for(data.get("name"))
        payload = json.dumps(data)

        try:
            path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise_error = self.raise_on_write_error if strict is None else strict
            if raise_error:
                raise RecordWriteError(path, str(exc)) from exc
            logger.error("Failed to write %s to %s", self.kind, path)
            return WriteResult(path=path, ok=False, error=str(exc))

        logger.debug("Wrote %s to %s", self.kind, path)
        return WriteResult(path=path)

    def read(self, name: str) -> Optional[Dict[str, Any]]:
        path = self.path_for(name)
        if not path.exists():
            logger.warning("Could not find %s at %s!", self.kind, path)
            return None
        data = _read_json(path)
        if not isinstance(data, dict):
            raise CorruptRecordError(path, f"expected an object, found {type(data).__name__}")
        return data

    def delete(self, name: str) -> bool:
        path = self.path_for(name)
        if not path.exists():
            return False
        path.unlink()
        logger.debug("Deleted %s at %s", self.kind, path)
        return True

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def _record_files(self) -> List[Path]:
        return [path for path in self.directory.iterdir() if path.name.endswith(RECORD_SUFFIX) and path.is_file()]

    def list_names(self) -> List[str]:
        """Record names in directory-listing order; not sorted."""
        return [path.name[: -len(RECORD_SUFFIX)] for path in self._record_files()]

    def read_all(self) -> List[Dict[str, Any]]:
        """Parse every record in the directory. Re-reads from disk on each call."""
        records: List[Dict[str, Any]] = []
        for path in self._record_files():
            data = _read_json(path)
            if not isinstance(data, dict):
                raise CorruptRecordError(path, f"expected an object, found {type(data).__name__}")
            records.append(data)
        return records


class Serializer:
    """Storage facade owning the workout and exercise directories and the recents file.

    Directories are created on construction if missing. The facade holds no
    other state; a ``RecentsQueue`` handed out by :meth:`load_recents` belongs to
    the caller until it is passed back to :meth:`write_recents`.
    """

    def __init__(
        self,
        workout_dir: PathLike = DEFAULT_WORKOUT_DIR,
        exercise_dir: PathLike = DEFAULT_EXERCISE_DIR,
        recents_path: PathLike = DEFAULT_RECENTS_FILE,
        raise_on_write_error: bool = False,
    ) -> None:
        self.workouts = EntityStore("workout", workout_dir, raise_on_write_error)
        self.exercises = EntityStore("exercise", exercise_dir, raise_on_write_error)
        self.recents_path = Path(recents_path)

    @property
    def workout_dir(self) -> Path:
        return self.workouts.directory

    @property
    def exercise_dir(self) -> Path:
        return self.exercises.directory

    # Workouts

    def write_workout(self, workout: Any, strict: Optional[bool] = None) -> WriteResult:
        return self.workouts.write(workout, strict=strict)

    def read_workout(self, name: str) -> Optional[Dict[str, Any]]:
        return self.workouts.read(name)

    def delete_workout(self, name: str) -> bool:
        return self.workouts.delete(name)

    def has_workout(self, name: str) -> bool:
        return self.workouts.exists(name)

    def list_workout_names(self) -> List[str]:
        return self.workouts.list_names()

    def all_workouts(self) -> List[Dict[str, Any]]:
        return self.workouts.read_all()

    # Exercises

    def write_exercise(self, exercise: Any, strict: Optional[bool] = None) -> WriteResult:
        return self.exercises.write(exercise, strict=strict)

    def read_exercise(self, name: str) -> Optional[Dict[str, Any]]:
        return self.exercises.read(name)

    def delete_exercise(self, name: str) -> bool:
        return self.exercises.delete(name)

    def has_exercise(self, name: str) -> bool:
        return self.exercises.exists(name)

    def list_exercise_names(self) -> List[str]:
        return self.exercises.list_names()

    def all_exercises(self) -> List[Dict[str, Any]]:
        return self.exercises.read_all()

    # Recent workouts

    def load_recents(self, max_size: int = DEFAULT_MAX_RECENTS, keep_all: bool = False) -> RecentsQueue:
        """Load the recents file, creating it with ``[]`` when absent.

        With ``keep_all`` the capacity grows to fit every stored entry, so a
        caller that only removes entries never truncates the file.
        """
        check_max_size(max_size)
        if not self.recents_path.exists():
            self.recents_path.parent.mkdir(parents=True, exist_ok=True)
            self.recents_path.write_text("[]", encoding="utf-8")
            logger.info("Created empty recent workouts file at %s", self.recents_path)

        data = _read_json(self.recents_path)
        if not isinstance(data, list):
            raise CorruptRecordError(self.recents_path, f"expected an array, found {type(data).__name__}")
        if keep_all:
            max_size = max(max_size, len(data))
        try:
            return RecentsQueue(max_size=max_size, entries=data)
        except ValueError as exc:
            raise CorruptRecordError(self.recents_path, str(exc)) from exc

    def write_recents(self, recents: RecentsQueue) -> Path:
        """Overwrite the recents file with the queue's serialized form."""
        self.recents_path.parent.mkdir(parents=True, exist_ok=True)
        self.recents_path.write_text(recents.to_json(), encoding="utf-8")
        logger.debug("Saved %d recent workouts to %s", len(recents), self.recents_path)
        return self.recents_path
