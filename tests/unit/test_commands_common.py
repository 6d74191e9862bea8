from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import pytest
import typer
from rich.console import Console
from rich.logging import RichHandler

from fit_store.commands.common import configure_logging, fail, get_state, open_store, print_json_payload
from fit_store.core.state import CLIState


@dataclass
class FakeContext:
    obj: Any


def _state(config: Dict[str, Any] | None = None, json_output: bool = False, plain_output: bool = True) -> CLIState:
    return CLIState(
        json_output=json_output,
        plain_output=plain_output,
        config_path=Path("/tmp/config.toml"),
        config=config or {},
        console=Console(record=True),
    )


def test_get_state_returns_cli_state() -> None:
    state = _state()
    assert get_state(FakeContext(obj=state)) is state


def test_get_state_raises_on_invalid_obj() -> None:
    with pytest.raises(typer.Exit):
        get_state(FakeContext(obj={"not": "state"}))


def test_state_strict_writes_reads_storage_section() -> None:
    assert _state().strict_writes is False
    assert _state({"storage": None}).strict_writes is False
    assert _state({"storage": {"strict_writes": True}}).strict_writes is True
    assert _state({"storage": {"strict_writes": True}}).storage == {"strict_writes": True}


def test_open_store_uses_configured_paths(tmp_path: Path) -> None:
    state = _state(
        {
            "storage": {
                "workout_dir": str(tmp_path / "w"),
                "exercise_dir": str(tmp_path / "e"),
                "recents_file": str(tmp_path / "r.json"),
                "strict_writes": True,
            }
        }
    )
    store = open_store(state)
    assert store.workout_dir == (tmp_path / "w").resolve()
    assert store.exercise_dir == (tmp_path / "e").resolve()
    assert store.recents_path == (tmp_path / "r.json").resolve()
    assert store.workouts.raise_on_write_error is True
    assert (tmp_path / "w").is_dir()


def test_print_json_payload_plain(capsys: pytest.CaptureFixture[str]) -> None:
    print_json_payload(_state(), {"a": 1})
    assert capsys.readouterr().out.strip() == '{"a":1}'


def test_fail_json_mode_exits_with_payload() -> None:
    state = _state(json_output=True, plain_output=False)
    with pytest.raises(typer.Exit) as excinfo:
        fail(state, "boom")
    assert excinfo.value.exit_code == 1
    assert json.loads(state.console.export_text()) == {"status": "error", "message": "boom"}


def test_configure_logging_levels() -> None:
    console = Console(record=True)
    logger = configure_logging(console, verbose=True)
    assert logger.level == logging.DEBUG
    rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    assert len(rich_handlers) == 1

    logger = configure_logging(console, quiet=True)
    assert logger.level == logging.ERROR
    assert len([h for h in logger.handlers if isinstance(h, RichHandler)]) == 1

    configure_logging(console)
    assert logger.level == logging.WARNING
