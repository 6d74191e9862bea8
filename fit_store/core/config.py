"""Configuration loading and persistence."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from fit_store.core.constants import DEFAULT_EXERCISE_DIR, DEFAULT_RECENTS_FILE, DEFAULT_WORKOUT_DIR
from fit_store.core.recents import DEFAULT_MAX_RECENTS


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("FIT_STORE_CONFIG_FILE", "~/.config/fit-store/config.toml")
    return expand_path(raw)


def _default_storage() -> Dict[str, Any]:
    data_dir = os.getenv("FIT_STORE_DATA_DIR")
    if data_dir:
        base = expand_path(data_dir)
        return {
            "workout_dir": str(base / "workouts"),
            "exercise_dir": str(base / "exercises"),
            "recents_file": str(base / "recent-workouts.json"),
        }
    return {
        "workout_dir": DEFAULT_WORKOUT_DIR,
        "exercise_dir": DEFAULT_EXERCISE_DIR,
        "recents_file": DEFAULT_RECENTS_FILE,
    }


def _default_config() -> Dict[str, Any]:
    storage = _default_storage()
    storage["strict_writes"] = False
    return {
        "storage": storage,
        "recents": {
            "max_size": DEFAULT_MAX_RECENTS,
        },
        "output": {
            "indent": 2,
        },
    }


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))

    return cfg


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, list):
        items = ", ".join(_toml_literal(item) for item in value if item is not None)
        return f"[{items}]"
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def _dict_to_toml(data: Dict[str, Any], prefix: Optional[str] = None) -> str:
    lines = []
    plain_keys = []
    nested_keys = []

    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            nested_keys.append((key, value))
        else:
            plain_keys.append((key, value))

    if prefix is not None:
        lines.append(f"[{prefix}]")

    for key, value in plain_keys:
        lines.append(f"{key} = {_toml_literal(value)}")

    if plain_keys and nested_keys:
        lines.append("")

    for index, (key, value) in enumerate(nested_keys):
        table_name = key if prefix is None else f"{prefix}.{key}"
        lines.append(_dict_to_toml(value, prefix=table_name))
        if index != len(nested_keys) - 1:
            lines.append("")

    return "\n".join(lines)


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Save configuration to disk as TOML (default) or JSON."""
    cfg_path = path or default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    if cfg_path.suffix.lower() == ".json":
        cfg_path.write_text(json.dumps(config, indent=2) + "\n")
        return cfg_path

    cfg_path.write_text(_dict_to_toml(config).strip() + "\n")
    return cfg_path


def resolve_storage_paths(config: Dict[str, Any]) -> Tuple[Path, Path, Path]:
    """Resolve (workout_dir, exercise_dir, recents_file) with env overrides first."""
    storage = config.get("storage", {})
    defaults = _default_storage()

    def _pick(env_name: str, key: str) -> Path:
        raw = os.getenv(env_name) or storage.get(key) or defaults[key]
        return expand_path(str(raw))

    return (
        _pick("FIT_STORE_WORKOUT_DIR", "workout_dir"),
        _pick("FIT_STORE_EXERCISE_DIR", "exercise_dir"),
        _pick("FIT_STORE_RECENTS_FILE", "recents_file"),
    )


def resolve_recents_max(config: Dict[str, Any], explicit: Optional[int] = None) -> int:
    """Resolve recents capacity with CLI override first."""
    raw = explicit if explicit is not None else config.get("recents", {}).get("max_size", DEFAULT_MAX_RECENTS)
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
        raise ConfigError(f"recents.max_size must be a positive integer, got {raw!r}")
    return raw
