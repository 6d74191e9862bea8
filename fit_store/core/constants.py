"""Shared constants."""

from __future__ import annotations

RECORD_SUFFIX = ".json"

DEFAULT_WORKOUT_DIR = "./workouts"
DEFAULT_EXERCISE_DIR = "./exercises"
DEFAULT_RECENTS_FILE = "./recent-workouts.json"
