"""Turning chat content into styled spans for the chat panel."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from triadchat.messages import messages
from triadchat.models import AiState, AiStatus, ProgressState
from triadchat.viewport import AI_NAME

COMMAND_PREFIX = "/"
AI_MENTION = "ops-ai"
DEFAULT_TITLE = "triadchat"
_PROGRESS_MARGIN = 20


class SpanRole(Enum):
    """What a span stands for; the view picks its colour from this."""

    RAW = "raw"
    COMMAND = "command"
    MENTION_ME = "mention_me"
    MENTION_OTHER = "mention_other"
    MENTION_AI = "mention_ai"
    PROGRESS = "progress"


@dataclass(frozen=True)
class Span:
    """A piece of text with the role that decides how it is drawn."""

    content: str
    role: SpanRole = SpanRole.RAW


def _is_name_char(character: str) -> bool:
    return character.isalnum() or character in "_-"


def _command_spans(content: str) -> list[Span]:
    spans: list[Span] = []
    for index, part in enumerate(content.split()):
        if index == 0:
            spans.append(Span(part, SpanRole.COMMAND))
        else:
            spans.append(Span(f" {part}"))
    return spans


def _mention_role(name: str, local_user_name: str) -> SpanRole:
    if name == local_user_name:
        return SpanRole.MENTION_ME
    if name in (AI_MENTION, AI_NAME):
        return SpanRole.MENTION_AI
    return SpanRole.MENTION_OTHER


def parse_content(content: str, local_user_name: str) -> list[Span]:
    """Split a message into spans, marking a leading command and @mentions.

    A mention starts with ``@`` at the start of the text or after a character
    that cannot be part of a name, and runs over letters, digits, ``_`` and
    ``-``.
    """
    if content.startswith(COMMAND_PREFIX):
        return _command_spans(content)

    spans: list[Span] = []
    last_pos = 0
    at_positions = (index for index, character in enumerate(content) if character == "@")
    for index in at_positions:
        if index < last_pos:
            continue
        if index > 0 and _is_name_char(content[index - 1]):
            continue

        if index > last_pos:
            spans.append(Span(content[last_pos:index]))

        end = index + 1
        while end < len(content) and _is_name_char(content[end]):
            end += 1

        if end - index > 1:
            mention = content[index:end]
            spans.append(Span(mention, _mention_role(mention[1:], local_user_name)))
            last_pos = end
        else:
            spans.append(Span("@"))
            last_pos = index + 1

    if last_pos < len(content):
        spans.append(Span(content[last_pos:]))
    if not spans:
        spans.append(Span(content))
    return spans


def progress_bar(panel_width: int, progress: ProgressState) -> list[Span]:
    """A title and a ``[###---]`` bar sized to fit a panel of ``panel_width``."""
    width = panel_width - _PROGRESS_MARGIN
    if width < 0:
        raise ValueError(f"panel width {panel_width} is too narrow for a progress bar")

    if progress.completed:
        title, filled = "Done! ", width
    elif progress.current is None:
        title, filled = "Pending: ", 0
    else:
        title = "Sending: "
        if progress.total == 0:
            filled = 0 if progress.current == 0 else width + 1
        else:
            filled = int(progress.current / progress.total * width)
        if filled > width:
            raise ValueError(
                f"progress {progress.current} exceeds total {progress.total}"
            )

    bar = f"[{'#' * filled}{'-' * (width - filled)}]"
    return [Span(title, SpanRole.PROGRESS), Span(bar, SpanRole.PROGRESS)]


def panel_title(ai_state: AiState, ai_thinking: bool, language: str) -> str:
    """Title of the chat panel reflecting what the AI is doing."""
    labels = messages(language)
    if ai_state.status is AiStatus.ACTING:
        return labels.acting_title
    if ai_state.status is AiStatus.FAILED:
        return labels.failed_title
    if ai_thinking:
        return labels.thinking_title
    return DEFAULT_TITLE