"""CLI state passed to fit-store commands through the Typer context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console


@dataclass
class CLIState:
    """Output mode, loaded configuration and console for one invocation."""

    json_output: bool
    plain_output: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console

    @property
    def storage(self) -> Dict[str, Any]:
        return self.config.get("storage") or {}

    @property
    def strict_writes(self) -> bool:
        """Whether failed record writes should raise instead of being reported."""
        return bool(self.storage.get("strict_writes", False))
