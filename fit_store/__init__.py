"""fit-store: local JSON storage for workouts, exercises and recent workouts."""

__version__ = "0.1.0"
