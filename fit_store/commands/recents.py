"""Recent workout history commands."""

from __future__ import annotations

from typing import Optional, Tuple

import typer

from fit_store.commands.common import fail, get_state, open_store, print_json_payload
from fit_store.core.config import ConfigError, resolve_recents_max
from fit_store.core.recents import RecentsQueue
from fit_store.core.state import CLIState
from fit_store.core.store import Serializer, StoreError

app = typer.Typer(help="Inspect and update recently used workouts")

MAX_OPTION_HELP = "Queue capacity (defaults to recents.max_size from config)"


def _load(
    state: CLIState,
    max_size: Optional[int],
    keep_all: bool = False,
) -> Tuple[Serializer, RecentsQueue]:
    try:
        capacity = resolve_recents_max(state.config, explicit=max_size)
        store = open_store(state)
        return store, store.load_recents(capacity, keep_all=keep_all)
    except (ConfigError, StoreError) as exc:
        fail(state, str(exc))


def _print_queue(state: CLIState, recents: RecentsQueue, heading: str) -> None:
    names = recents.names()
    if state.json_output:
        print_json_payload(
            state,
            {"max_size": recents.max_size, "total": len(recents), "workouts": recents.to_list()},
        )
        return

    if state.plain_output:
        for name in names:
            typer.echo(name)
        return

    state.console.print(f"{heading} ({len(recents)}/{recents.max_size})")
    for index, name in enumerate(names, start=1):
        state.console.print(f"  {index}. {name}", markup=False)


@app.command("show")
def show_command(
    ctx: typer.Context,
    max_size: Optional[int] = typer.Option(None, "--max", help=MAX_OPTION_HELP),
) -> None:
    """Show recent workouts, most recent first."""
    state = get_state(ctx)
    _, recents = _load(state, max_size)
    _print_queue(state, recents, "Recent workouts")


@app.command("add")
def add_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of a stored workout"),
    max_size: Optional[int] = typer.Option(None, "--max", help=MAX_OPTION_HELP),
) -> None:
    """Push a stored workout to the front of the recents list."""
    state = get_state(ctx)
    store, recents = _load(state, max_size)

    try:
        if not store.has_workout(name):
            fail(state, f"Workout not found: {name}")
        workout = store.read_workout(name) or {}
    except StoreError as exc:
        fail(state, str(exc))

    evicted = recents.add(workout)
    store.write_recents(recents)

    if evicted is not None and not state.json_output:
        state.console.print(f"Dropped oldest recent workout {evicted.get('name')}", markup=False)
    _print_queue(state, recents, "Recent workouts")


@app.command("remove")
def remove_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Workout name"),
) -> None:
    """Remove a workout from the recents list."""
    state = get_state(ctx)
    store, recents = _load(state, None, keep_all=True)

    removed = recents.remove(name)
    if removed:
        store.write_recents(recents)

    payload = {"status": "removed" if removed else "missing", "name": name}
    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo(f"status\t{payload['status']}")
        typer.echo(f"name\t{name}")
        return

    if removed:
        state.console.print(f"Removed {name} from recent workouts", markup=False)
    else:
        state.console.print(f"{name} is not in recent workouts", markup=False)


@app.command("clear")
def clear_command(ctx: typer.Context) -> None:
    """Empty the recents list."""
    state = get_state(ctx)
    store, recents = _load(state, None, keep_all=True)
    cleared = len(recents)
    recents.clear()
    store.write_recents(recents)

    if state.json_output:
        print_json_payload(state, {"status": "cleared", "removed": cleared})
        return

    if state.plain_output:
        typer.echo("status\tcleared")
        typer.echo(f"removed\t{cleared}")
        return

    state.console.print(f"Cleared {cleared} recent workout(s)")
