"""Text helpers for laying out input and reporting send errors."""

from __future__ import annotations

from typing import Iterable

from wcwidth import wcwidth


def _char_width(character: str) -> int:
    return max(wcwidth(character), 0)


def split_each(text: str, width: int) -> list[str]:
    """Split ``text`` into rows whose display width fits ``width`` columns."""
    if width <= 0:
        raise ValueError("width must be positive")
    rows: list[str] = []
    row: list[str] = []
    used = 0
    for character in text:
        char_width = _char_width(character)
        if (used != 0 and used == width) or used + char_width > width:
            rows.append("".join(row))
            row = []
            used = 0
        row.append(character)
        used += char_width
    if row:
        rows.append("".join(row))
    return rows


def stringify_sendall_errors(errors: Iterable[tuple[object, object]]) -> str:
    """One line per failed endpoint, joined by newlines."""
    return "\n".join(
        f"Failed to connect to {endpoint}, error: {error}" for endpoint, error in errors
    )