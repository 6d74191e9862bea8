"""Exercise library commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from fit_store.commands.common import fail, get_state, open_store, print_json_payload
from fit_store.core.store import StoreError
from fit_store.utils.parsing import RecordInputError, build_basic_exercise, load_record_input

app = typer.Typer(help="Manage the exercise library")


def _render_table(state, exercises: List[Dict[str, Any]]) -> None:
    table = Table(title=f"{len(exercises)} exercise(s)")
    table.add_column("Name")
    table.add_column("Muscle groups")
    table.add_column("Equipment")
    for exercise in exercises:
        table.add_row(
            escape(str(exercise.get("name", ""))),
            escape(", ".join(str(item) for item in exercise.get("muscle_groups") or [])),
            escape(", ".join(str(item) for item in exercise.get("equipment") or [])),
        )
    state.console.print(table)


@app.command("list")
def list_command(
    ctx: typer.Context,
    full: bool = typer.Option(False, "--full", help="Load full exercise records, not only names"),
) -> None:
    """List exercises in the library."""
    state = get_state(ctx)
    store = open_store(state)

    if not full:
        names = sorted(store.list_exercise_names())
        if state.json_output:
            print_json_payload(state, {"exercises": names, "total": len(names)})
        elif state.plain_output:
            for name in names:
                typer.echo(name)
        elif not names:
            state.console.print("No exercises stored")
        else:
            state.console.print(f"{len(names)} exercise(s)")
            for name in names:
                state.console.print(f"  {name}", markup=False)
        return

    try:
        exercises = sorted(store.all_exercises(), key=lambda item: str(item.get("name", "")))
    except StoreError as exc:
        fail(state, str(exc))

    if state.json_output:
        print_json_payload(state, {"exercises": exercises, "total": len(exercises)})
        return

    if state.plain_output:
        for exercise in exercises:
            typer.echo(json.dumps(exercise, separators=(",", ":")))
        return

    _render_table(state, exercises)


@app.command("show")
def show_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exercise name"),
) -> None:
    """Show one exercise."""
    state = get_state(ctx)
    try:
        store = open_store(state)
        if not store.has_exercise(name):
            fail(state, f"Exercise not found: {name}")
        exercise = store.read_exercise(name) or {}
    except StoreError as exc:
        fail(state, str(exc))

    if state.json_output:
        print_json_payload(state, exercise)
        return

    if state.plain_output:
        typer.echo(json.dumps(exercise, separators=(",", ":")))
        return

    _render_table(state, [exercise])
    if exercise.get("description"):
        state.console.print(exercise["description"], markup=False)


@app.command("save")
def save_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="JSON/YAML file with exercise(s)"),
    stdin: bool = typer.Option(False, "--stdin", help="Read exercise data from stdin"),
    name: Optional[str] = typer.Option(None, help="Exercise name"),
    muscle: List[str] = typer.Option([], "--muscle", "-m", help="Muscle group (repeatable)"),
    equipment: List[str] = typer.Option([], "--equipment", help="Equipment (repeatable)"),
    description: str = typer.Option("", help="Exercise description"),
) -> None:
    """Store exercise definitions, overwriting existing ones with the same name."""
    state = get_state(ctx)

    stdin_text = sys.stdin.read() if stdin else ""
    try:
        exercises: List[Any] = load_record_input(file_path=file, read_stdin=stdin, stdin_text=stdin_text)
    except RecordInputError as exc:
        raise typer.BadParameter(str(exc))

    if not exercises and name:
        exercises = [
            build_basic_exercise(
                name=name,
                muscle_groups=muscle,
                equipment=equipment,
                description=description,
            )
        ]

    if not exercises:
        raise typer.BadParameter("Provide --file, --stdin, or --name for quick creation")

    store = open_store(state)
    results: List[Dict[str, Any]] = []
    for exercise in exercises:
        try:
            result = store.write_exercise(exercise)
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
        state.console.print(f"Saved {len(results) - len(failed)} of {len(results)} exercise(s)")
        for item in failed:
            state.console.print(f"  failed: {item['path']} ({item['error']})", markup=False)

    if failed:
        raise typer.Exit(code=1)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exercise name"),
    force: bool = typer.Option(False, "--force", help="Skip confirmation prompt"),
) -> None:
    """Delete an exercise by name."""
    state = get_state(ctx)

    if not force:
        confirmed = typer.confirm(f"Delete exercise {name}?", default=False)
        if not confirmed:
            raise typer.Exit(code=0)

    try:
        removed = open_store(state).delete_exercise(name)
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
        state.console.print(f"Deleted exercise {name}", markup=False)
    else:
        state.console.print(f"No exercise named {name}", markup=False)
