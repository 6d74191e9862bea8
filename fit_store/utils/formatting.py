"""Formatting helpers used by console output."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


def format_duration(seconds: Optional[int]) -> str:
    """Format seconds as H:MM:SS or M:SS."""
    if not seconds:
        return "N/A"
    h, rem = divmod(int(seconds), 3600)
    m, s = divmod(rem, 60)
    if h:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def format_weight(weight: Optional[float]) -> str:
    if weight is None:
        return ""
    value = float(weight)
    return f"{value:.0f}" if value.is_integer() else f"{value:.1f}"


def format_entry(entry: Dict[str, Any]) -> str:
    """Format one exercise entry into readable text."""
    name = entry.get("exercise") or entry.get("name") or "?"
    duration = entry.get("duration_seconds")
    if duration:
        text = f"{name} {format_duration(duration)}"
    else:
        text = f"{name} {entry.get('sets', 1)}x{entry.get('reps', 0)}"
        weight = format_weight(entry.get("weight"))
        if weight:
            text += f" @ {weight}"
    notes = entry.get("notes")
    if notes:
        text += f" ({notes})"
    return text


def format_entries(entries: Any) -> List[str]:
    """Format a workout's entries, skipping anything that is not an object."""
    if not isinstance(entries, list):
        return []
    return [format_entry(entry) for entry in entries if isinstance(entry, dict)]
