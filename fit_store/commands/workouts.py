"""Workout storage commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.markup import escape

from fit_store.commands.common import fail, get_state, open_store, print_json_payload
from fit_store.core.store import StoreError
from fit_store.utils.formatting import format_entries
from fit_store.utils.parsing import RecordInputError, build_basic_workout, load_record_input

app = typer.Typer(help="Manage stored workouts")


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List stored workout names."""
    state = get_state(ctx)
    names = sorted(open_store(state).list_workout_names())

    if state.json_output:
        print_json_payload(state, {"workouts": names, "total": len(names)})
        return

    if state.plain_output:
        for name in names:
            typer.echo(name)
        return

    if not names:
        state.console.print("No workouts stored")
        return
    state.console.print(f"{len(names)} workout(s)")
    for name in names:
        state.console.print(f"  {name}", markup=False)


@app.command("show")
def show_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Workout name"),
) -> None:
    """Show one stored workout."""
    state = get_state(ctx)
    try:
        store = open_store(state)
        if not store.has_workout(name):
            fail(state, f"Workout not found: {name}")
        workout = store.read_workout(name) or {}
    except StoreError as exc:
        fail(state, str(exc))

    if state.json_output:
        print_json_payload(state, workout)
        return

    if state.plain_output:
        typer.echo(json.dumps(workout, separators=(",", ":")))
        return

    state.console.print(f"[bold]{escape(str(workout.get('name', name)))}[/bold]")
    if workout.get("description"):
        state.console.print(workout["description"], markup=False)
    for line in format_entries(workout.get("entries")):
        state.console.print(f"  - {line}", markup=False)


@app.command("save")
def save_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="JSON/YAML file with workout(s)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read workout data from stdin"),
    name: Optional[str] = typer.Option(None, help="Workout name"),
    entry: List[str] = typer.Option([], "--entry", "-e", help="Entry NAME:SETSxREPS[@WEIGHT] or NAME:MM:SS"),
    description: str = typer.Option("", help="Workout description"),
) -> None:
    """Store workout definitions, overwriting existing ones with the same name."""
    state = get_state(ctx)

    stdin_text = sys.stdin.read() if stdin else ""
    try:
        workouts: List[Any] = load_record_input(file_path=file, read_stdin=stdin, stdin_text=stdin_text)
    except RecordInputError as exc:
        raise typer.BadParameter(str(exc))

    if not workouts and name:
        try:
            workouts = [build_basic_workout(name=name, entries=entry, description=description)]
        except ValueError as exc:
            raise typer.BadParameter(str(exc))

    if not workouts:
        raise typer.BadParameter("Provide --file, --stdin, or --name for quick creation")

    store = open_store(state)
    results: List[Dict[str, Any]] = []
    for workout in workouts:
        try:
            result = store.write_workout(workout)
        except StoreError as exc:
            fail(state, str(exc))
        results.append(
            {
                "status": "saved" if result.ok else "failed",
                "path": str(result.path),
                "error": result.error,
            }
        )

    failed = [item for item in results if item["status"] != "saved"]

    if state.json_output:
        print_json_payload(state, {"results": results})
    elif state.plain_output:
        typer.echo(f"processed\t{len(results)}")
        for item in results:
            typer.echo(f"{item['status']}\t{item['path']}")
    else:
        state.console.print(f"Saved {len(results) - len(failed)} of {len(results)} workout(s)")
        for item in failed:
            state.console.print(f"  failed: {item['path']} ({item['error']})", markup=False)

    if failed:
        raise typer.Exit(code=1)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Workout name"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
) -> None:
    """Delete a stored workout by name."""
    state = get_state(ctx)

    if not force:
        confirmed = typer.confirm(f"Delete workout {name}?", default=False)
        if not confirmed:
            raise typer.Exit(code=0)

    try:
        removed = open_store(state).delete_workout(name)
    except StoreError as exc:
        fail(state, str(exc))

    payload = {"status": "deleted" if removed else "missing", "name": name}
    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo(f"status\t{payload['status']}")
        typer.echo(f"name\t{name}")
        return

    if removed:
        state.console.print(f"Deleted workout {name}", markup=False)
    else:
        state.console.print(f"No workout named {name}", markup=False)
