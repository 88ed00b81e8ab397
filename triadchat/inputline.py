"""The editable input line with its submission history."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from wcwidth import wcwidth


class CursorMovement(Enum):
    LEFT = "left"
    RIGHT = "right"
    START = "start"
    END = "end"


def _char_width(character: str) -> int:
    return max(wcwidth(character), 0)


@dataclass
class InputLine:
    """Characters being typed, a cursor into them and past submissions.

    While browsing history, ``history_cursor`` points at the shown entry and
    ``draft`` keeps what was typed before browsing began.
    """

    chars: list[str] = field(default_factory=list)
    cursor: int = 0
    history: list[str] = field(default_factory=list)
    history_cursor: int | None = None
    draft: str = ""

    def text(self) -> str:
        """The current input as a string."""
        return "".join(self.chars)

    def write(self, character: str) -> None:
        """Insert ``character`` at the cursor and move past it."""
        self.chars.insert(self.cursor, character)
        self.cursor += 1

    def remove(self) -> None:
        """Delete the character under the cursor, if any."""
        if self.cursor < len(self.chars):
            del self.chars[self.cursor]

    def remove_previous(self) -> None:
        """Delete the character before the cursor, if any."""
        if self.cursor > 0:
            self.cursor -= 1
            del self.chars[self.cursor]

    def move_cursor(self, movement: CursorMovement) -> None:
        if movement is CursorMovement.LEFT:
            if self.cursor > 0:
                self.cursor -= 1
        elif movement is CursorMovement.RIGHT:
            if self.cursor < len(self.chars):
                self.cursor += 1
        elif movement is CursorMovement.START:
            self.cursor = 0
        else:
            self.cursor = len(self.chars)

    def reset(self) -> str | None:
        """Take the input for submission; ``None`` if there is nothing typed.

        Input that is not blank is appended to the history.
        """
        if not self.chars:
            return None
        self.history_cursor = None
        self.draft = ""
        self.cursor = 0
        text = "".join(self.chars)
        self.chars = []
        if text.strip():
            self.history.append(text)
        return text

    def in_history_mode(self) -> bool:
        return self.history_cursor is not None

    def history_prev(self) -> None:
        """Show the previous (older) history entry."""
        if not self.history:
            return
        if self.history_cursor is None:
            self.draft = "".join(self.chars)
            self._load(len(self.history) - 1)
        elif self.history_cursor > 0:
            self._load(self.history_cursor - 1)

    def history_next(self) -> None:
        """Show the next (newer) entry, or the saved draft past the newest."""
        if self.history_cursor is None:
            return
        if self.history_cursor + 1 >= len(self.history):
            self.history_cursor = None
            self.chars = list(self.draft)
            self.cursor = len(self.chars)
        else:
            self._load(self.history_cursor + 1)

    def _load(self, index: int) -> None:
        self.history_cursor = index
        self.chars = list(self.history[index])
        self.cursor = len(self.chars)

    def ui_cursor(self, width: int) -> tuple[int, int]:
        """Column and row of the cursor when the input wraps at ``width``."""
        column = 0
        row = 0
        for character in self.chars[: self.cursor]:
            char_width = _char_width(character)
            column += char_width
            if column == width:
                column = 0
                row += 1
            elif column > width:
                column -= width - (char_width - 1)
                row += 1
        return column, row