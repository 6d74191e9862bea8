"""Shared command helpers."""

from __future__ import annotations

import json
import logging
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from fit_store.core.config import resolve_storage_paths
from fit_store.core.state import CLIState
from fit_store.core.store import Serializer


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def configure_logging(console: Console, verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Route fit_store log records through a Rich handler on the given console."""
    logger = logging.getLogger("fit_store")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def open_store(state: CLIState) -> Serializer:
    """Build the storage facade from the loaded configuration."""
    workout_dir, exercise_dir, recents_file = resolve_storage_paths(state.config)
    return Serializer(
        workout_dir=workout_dir,
        exercise_dir=exercise_dir,
        recents_path=recents_file,
        raise_on_write_error=state.strict_writes,
    )


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def fail(state: CLIState, message: str, code: int = 1) -> NoReturn:
    """Report an error in the active output mode and exit."""
    if state.json_output:
        print_json_payload(state, {"status": "error", "message": message})
    elif state.plain_output:
        typer.echo("status\terror")
        typer.echo(f"message\t{message}")
    else:
        state.console.print(f"Error: {message}", markup=False)
    raise typer.Exit(code=code)
