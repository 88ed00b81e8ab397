"""Panel split constraints and width decisions for the terminal layout."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Length:
    """A pane of exactly ``value`` cells."""

    value: int


@dataclass(frozen=True)
class Min:
    """A pane of at least ``value`` cells that takes the remaining space."""

    value: int


def three_pane_constraints() -> list[Length | Min]:
    """Wide split: peers, chat, status."""
    return [Length(18), Min(0), Length(22)]


def left_right_constraints() -> list[Length | Min]:
    """Horizontal split: peers, right column."""
    return [Length(18), Min(0)]


def right_column_constraints() -> list[Length | Min]:
    """Vertical split of the right column: chat above, status below."""
    return [Min(0), Length(8)]


def should_show_side_panels(cols: int) -> bool:
    """Whether the terminal is wide enough for the peers side panel."""
    return cols >= 80


def left_column_constraints(left_height: int) -> list[Length | Min]:
    """Peers above, rooms below; rooms take 40% above 30 rows, else up to 8."""
    if left_height > 30:
        rooms_height = left_height * 2 // 5
    else:
        rooms_height = min(left_height, 8)
    return [Min(0), Length(rooms_height)]


def truncate(s: str, max_chars: int) -> str:
    """The first ``max_chars`` characters of ``s``."""
    return s[:max_chars]