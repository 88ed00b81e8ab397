"""Text shown in the AI status panel: mode, state, proposals and TODOs."""

from __future__ import annotations

from triadchat.layout import truncate
from triadchat.models import AiMode, AiState, AiStatus, SkillProposal

_MODE_LABELS = {
    AiMode.CLERK: "clerk",
    AiMode.LISTENER: "listener",
    AiMode.MODERATOR: "moderator",
    AiMode.OPERATOR: "operator",
    AiMode.COMPANION: "companion 🗣",
}

_STATE_LABELS = {
    AiStatus.IDLE: "idle",
    AiStatus.THINKING: "thinking…",
    AiStatus.ACTING: "acting",
    AiStatus.DISABLED: "disabled",
}


def _limit(width: int, margin: int, low: int, high: int) -> int:
    return min(max(max(width - margin, 0), low), high)


def todo_text_limit(width: int) -> int:
    """How many characters of a TODO's text fit a column of ``width``."""
    return _limit(width, 10, 16, 60)


def failure_reason_limit(width: int) -> int:
    """How many characters of a failure reason fit a column of ``width``."""
    return _limit(width, 5, 10, 40)


def proposal_name_limit(width: int) -> int:
    """How many characters of a skill name fit a column of ``width``."""
    return _limit(width, 10, 12, 30)


def overflow_line(hidden_count: int) -> str | None:
    """A note on how many items were left out, or ``None`` if none were."""
    if hidden_count > 0:
        return f"  … +{hidden_count} more"
    return None


def format_ai_mode(mode: AiMode) -> str:
    """Label of the AI mode as shown in the panel."""
    return _MODE_LABELS[mode]


def format_ai_state(state: AiState, width: int) -> str:
    """Label of the AI state; a failure reason is cut to fit ``width``."""
    if state.status is AiStatus.FAILED:
        return f"failed: {truncate(state.reason, failure_reason_limit(width))}"
    return _STATE_LABELS[state.status]


def proposal_line(proposal: SkillProposal, width: int) -> str:
    """One line for a skill proposal: its id, trust marker and name."""
    marker = "✓" if proposal.trusted else "?"
    name = truncate(proposal.skill_name, proposal_name_limit(width))
    return f"[{proposal.id}] {marker} {name}"