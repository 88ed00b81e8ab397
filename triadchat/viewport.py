"""Line estimates and scroll position of the chat panel."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from wcwidth import wcwidth

from triadchat.models import ChatMessage, MessageKind

AI_NAME = "ops-ai ✦"
_DATE_WIDTH = 9  # "HH:MM:SS "


class ScrollMovement(Enum):
    UP = "up"
    DOWN = "down"
    START = "start"
    END = "end"


def _str_width(text: str) -> int:
    return sum(max(wcwidth(character), 0) for character in text)


def _lines(content: str) -> list[str]:
    parts = content.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _div_ceil(value: int, divisor: int) -> int:
    return -(-value // divisor)


def _text_lines(content: str, header_width: int, width: int) -> int:
    total = 0
    for index, line in enumerate(_lines(content)):
        line_width = _str_width(line)
        available = max(width - header_width, 0) if index == 0 else width
        if available == 0:
            total += _div_ceil(line_width, width) + 1
            continue
        total += 1
        if line_width > available:
            total += _div_ceil(line_width - available, width)
    return 1 if not content else total


def _system_lines(content: str, header_width: int, width: int) -> int:
    total = 0
    first_chunk = max(width - header_width, 0)
    for line in _lines(content):
        line_width = _str_width(line)
        total += 1
        if first_chunk == 0:
            total += _div_ceil(line_width, width)
            continue
        if line_width > first_chunk:
            remaining = line_width - first_chunk
            wrap_width = max(width - _DATE_WIDTH, 0)
            total += _div_ceil(remaining, wrap_width if wrap_width > 0 else width)
    return 1 if not content else total


def estimate_lines(message: ChatMessage, width: int) -> int:
    """Number of panel rows ``message`` takes when wrapped at ``width``."""
    if width <= 0:
        raise ValueError("width must be positive")
    user_width = _str_width(message.user)
    if message.kind is MessageKind.TEXT:
        return _text_lines(message.text, _DATE_WIDTH + user_width + 2, width)
    if message.kind is MessageKind.AI_TEXT:
        return _text_lines(message.text, _DATE_WIDTH + _str_width(AI_NAME) + 2, width)
    if message.kind is MessageKind.SYSTEM:
        return _system_lines(message.text, _DATE_WIDTH + user_width, width)
    return 1


@dataclass
class ChatViewport:
    """Size of the chat panel and how far its content is scrolled."""

    width: int = 0
    height: int = 0
    total_lines: int = 0
    offset: int = 0
    auto_scroll: bool = True

    def _max_offset(self) -> int:
        inner_height = max(self.height - 2, 0)
        return max(self.total_lines - inner_height, 0)

    def scroll(self, movement: ScrollMovement) -> None:
        if movement is ScrollMovement.UP:
            if self.offset > 0:
                self.offset -= 1
            self.auto_scroll = False
        elif movement is ScrollMovement.DOWN:
            self.offset += 1
            max_offset = self._max_offset()
            if self.offset >= max_offset:
                self.auto_scroll = True
                self.offset = max_offset
        elif movement is ScrollMovement.START:
            self.offset = 0
            self.auto_scroll = False
        else:
            self.offset = self._max_offset()
            self.auto_scroll = True

    def update(self, width: int, height: int, messages: Iterable[ChatMessage]) -> None:
        """Resize the panel, recounting lines of ``messages`` if it changed."""
        if self.width == width and self.height == height:
            return
        self.width = width
        self.height = height
        if self.width < 4:
            return
        inner_width = self.width - 2
        self.total_lines = sum(estimate_lines(message, inner_width) for message in messages)
        if self.auto_scroll:
            self.offset = self._max_offset()

    def add(self, message: ChatMessage) -> None:
        """Account for a message appended to the log."""
        if self.width < 4:
            return
        self.total_lines += estimate_lines(message, self.width - 2)
        if self.auto_scroll:
            self.offset = self._max_offset()