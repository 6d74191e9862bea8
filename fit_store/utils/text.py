"""Text helpers."""

from __future__ import annotations

from typing import Optional

_FORBIDDEN_CHARS = ("/", "\\", "\x00")


def name_problem(name: object) -> Optional[str]:
    """Return why ``name`` cannot be used as a record file name, or None."""
    if not isinstance(name, str):
        return f"name must be a string, got {type(name).__name__}"
    if not name.strip():
        return "name must not be empty"
    if name in {".", ".."}:
        return f"name {name!r} is reserved"
    for char in _FORBIDDEN_CHARS:
        if char in name:
            return f"name {name!r} contains a path separator or NUL byte"
    return None
