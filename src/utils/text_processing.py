"""Label wrapping and value formatting for node labels and tooltips."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

LABEL_WIDTH = 30


def wrap_label(text: str, width: int = LABEL_WIDTH) -> str:
    """Greedy word wrap on spaces; words are never split.

    Text of ``width`` characters or fewer is returned unchanged. A single word
    longer than ``width`` ends up on a line of its own.
    """
    if len(text) <= width:
        return text

    lines: list[str] = []
    current = ""
    for word in text.split(" "):
        if current and len(current) + 1 + len(word) > width:
            lines.append(current)
            current = word
        else:
            current = f"{current} {word}" if current else word
    if current:
        lines.append(current)
    return "\n".join(lines)


def format_count(value: Any) -> str:
    """Thousands separators for integer-like metrics, ``str()`` otherwise."""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:,.2f}"
    if isinstance(value, str):
        try:
            return f"{int(value):,}"
        except ValueError:
            pass
    return str(value)


def _as_date(value: Any) -> date | None:
    # neo4j.time types expose to_native()
    to_native = getattr(value, "to_native", None)
    if callable(to_native):
        value = to_native()
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            try:
                return date.fromisoformat(raw[:10])
            except ValueError:
                return None
    return None


def format_date(value: Any) -> str:
    """Render a publish date as ``Mon D, YYYY``; unparseable input is echoed."""
    parsed = _as_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"
