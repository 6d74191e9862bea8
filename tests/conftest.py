from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from fit_store.core.store import Serializer


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "FIT_STORE_CONFIG_FILE",
        "FIT_STORE_DATA_DIR",
        "FIT_STORE_WORKOUT_DIR",
        "FIT_STORE_EXERCISE_DIR",
        "FIT_STORE_RECENTS_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "data"
    monkeypatch.setenv("FIT_STORE_DATA_DIR", str(path))
    monkeypatch.setenv("FIT_STORE_CONFIG_FILE", str(tmp_path / "config.toml"))
    return path


@pytest.fixture()
def store(tmp_path: Path) -> Serializer:
    return Serializer(
        workout_dir=tmp_path / "workouts",
        exercise_dir=tmp_path / "exercises",
        recents_path=tmp_path / "recent-workouts.json",
    )


@pytest.fixture()
def sample_workout_squat() -> Dict[str, Any]:
    return {
        "name": "squat",
        "entries": [
            {"exercise": "back squat", "sets": 5, "reps": 5, "weight": 100.0},
            {"exercise": "lunge", "sets": 3, "reps": 10, "weight": None},
        ],
        "description": "Heavy legs",
    }


@pytest.fixture()
def sample_workout_bench() -> Dict[str, Any]:
    return {
        "name": "bench",
        "entries": [{"exercise": "bench press", "sets": 5, "reps": 5, "weight": 80.0}],
        "description": "Push",
    }


@pytest.fixture()
def sample_workout_row() -> Dict[str, Any]:
    return {
        "name": "row",
        "entries": [{"exercise": "barbell row", "sets": 4, "reps": 8, "weight": 60.0}],
        "description": "Pull",
    }


@pytest.fixture()
def sample_workouts(
    sample_workout_squat: Dict[str, Any],
    sample_workout_bench: Dict[str, Any],
    sample_workout_row: Dict[str, Any],
) -> List[Dict[str, Any]]:
    return [sample_workout_squat, sample_workout_bench, sample_workout_row]


@pytest.fixture()
def sample_exercise() -> Dict[str, Any]:
    return {
        "name": "deadlift",
        "muscle_groups": ["hamstrings", "glutes", "back"],
        "equipment": ["barbell"],
        "description": "Hip hinge",
    }


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
