"""Localised labels for the chat panel."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Messages:
    connected: str
    disconnected: str
    thinking_title: str
    acting_title: str
    failed_title: str


_JA = Messages(
    connected=" が接続しました",
    disconnected=" が切断しました",
    thinking_title="[ops-ai: 考え中...]",
    acting_title="[ops-ai: 実行中...]",
    failed_title="[ops-ai: 失敗]",
)

_EN = Messages(
    connected=" is online",
    disconnected=" is offline",
    thinking_title="[ops-ai: thinking...]",
    acting_title="[ops-ai: acting...]",
    failed_title="[ops-ai: failed]",
)


def messages(lang: str) -> Messages:
    """Labels for ``lang``; Japanese for "ja", English otherwise."""
    return _JA if lang == "ja" else _EN