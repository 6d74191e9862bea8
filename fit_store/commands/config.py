"""Configuration commands."""

from __future__ import annotations

import typer

from fit_store.commands.common import fail, get_state, print_json_payload
from fit_store.core.config import ConfigError, resolve_recents_max, resolve_storage_paths, save_config

app = typer.Typer(help="Inspect and create configuration")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Show the effective configuration and resolved storage paths."""
    state = get_state(ctx)
    workout_dir, exercise_dir, recents_file = resolve_storage_paths(state.config)
    try:
        recents_max = resolve_recents_max(state.config)
    except ConfigError as exc:
        fail(state, str(exc), code=2)

    payload = {
        "config_path": str(state.config_path),
        "config_exists": state.config_path.exists(),
        "workout_dir": str(workout_dir),
        "exercise_dir": str(exercise_dir),
        "recents_file": str(recents_file),
        "recents_max": recents_max,
        "strict_writes": state.strict_writes,
    }

    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        for key, value in payload.items():
            typer.echo(f"{key}\t{value}")
        return

    for key, value in payload.items():
        state.console.print(f"{key}: {value}", markup=False)


@app.command("init")
def init_command(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write the current configuration to the config file."""
    state = get_state(ctx)
    if state.config_path.exists() and not force:
        fail(state, f"Config file already exists: {state.config_path} (use --force to overwrite)")

    path = save_config(state.config, state.config_path)

    if state.json_output:
        print_json_payload(state, {"status": "written", "path": str(path)})
        return

    if state.plain_output:
        typer.echo("status\twritten")
        typer.echo(f"path\t{path}")
        return

    state.console.print(f"Wrote config to {path}", markup=False)
