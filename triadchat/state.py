"""The whole client state: chat log, input line, peers, trust and AI status."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable

from triadchat.inputline import InputLine
from triadchat.models import (
    AiFrequency,
    AiMode,
    AiState,
    AiStatus,
    ChatMessage,
    MessageKind,
    PeerInfo,
    ProgressState,
    SkillProposal,
    SystemMessageType,
)
from triadchat.peers import PeerDirectory
from triadchat.text import stringify_sendall_errors
from triadchat.viewport import ChatViewport, ScrollMovement

AI_USER = "ops-ai"
SYSTEM_USER = "triadchat: "


@dataclass
class State:
    """Everything the chat client shows and remembers between events."""

    local_user_name: str = ""
    messages: list[ChatMessage] = field(default_factory=list)
    input: InputLine = field(default_factory=InputLine)
    viewport: ChatViewport = field(default_factory=ChatViewport)
    peers: PeerDirectory = field(default_factory=PeerDirectory)
    active_room_members: frozenset[str] | None = None
    pending_confirmation: Any = None
    skill_proposals: list[SkillProposal] = field(default_factory=list)
    ai_state: AiState = field(default_factory=AiState)
    ai_mode: AiMode = AiMode.CLERK
    ai_thinking: bool = False
    abort_handle: Any = None
    last_ai_at: float | None = None
    human_streak: int = 0
    ai_frequency: AiFrequency = AiFrequency.NORMAL
    ui_language: str = "ja"
    last_structured_output: Any = None
    user_avatar: str = "human_default"
    ai_avatar: str = "ai_default"
    room_list_scroll: int = 0
    _trusted_fingerprints: set[str] = field(default_factory=set)

    # --- chat panel -------------------------------------------------------

    def messages_scroll(self, movement: ScrollMovement) -> None:
        self.viewport.scroll(movement)

    def update_chat_viewport(self, width: int, height: int) -> None:
        self.viewport.update(width, height, self.messages)

    # --- peers ------------------------------------------------------------

    def connected_user(self, endpoint: Hashable, user: str) -> None:
        """Register a user and announce the connection if it is new."""
        if self.peers.connect(endpoint, user):
            self.add_message(ChatMessage(user, MessageKind.CONNECTION))

    def disconnected_user(self, endpoint: Hashable) -> None:
        """Forget the user at ``endpoint`` and announce it if one was there."""
        user = self.peers.disconnect(endpoint)
        if user is not None:
            self.add_message(ChatMessage(user, MessageKind.DISCONNECTION))

    def record_peer(self, endpoint: Hashable, peer: PeerInfo) -> None:
        self.peers.record(endpoint, peer)

    def all_user_endpoints(self) -> list[Hashable]:
        """Endpoints to send to: room members when a room is active, else all."""
        if self.active_room_members is None:
            return self.peers.endpoints()
        return [
            endpoint
            for endpoint, name in self.peers.users.items()
            if name != self.local_user_name and name in self.active_room_members
        ]

    # --- messages ---------------------------------------------------------

    def add_message(self, message: ChatMessage) -> None:
        self.messages.append(message)
        self.viewport.add(message)

    def add_ai_message(self, text: str, structured: Any = None) -> None:
        """Append an AI reply and remember its structured output."""
        self.last_structured_output = structured
        self.add_message(ChatMessage(AI_USER, MessageKind.AI_TEXT, text))

    def _add_system(self, content: str, system_type: SystemMessageType) -> None:
        self.add_message(
            ChatMessage(SYSTEM_USER, MessageKind.SYSTEM, content, system_type=system_type)
        )

    def add_system_warn_message(self, content: str) -> None:
        self._add_system(content, SystemMessageType.WARNING)

    def add_system_info_message(self, content: str) -> None:
        self._add_system(content, SystemMessageType.INFO)

    def add_system_error_message(self, content: str) -> None:
        self._add_system(content, SystemMessageType.ERROR)

    def report_error(self, error: Any) -> None:
        """Show an error to the user.

        ``error`` is an exception, a string, or a list of
        ``(endpoint, error)`` pairs from a failed broadcast; an empty list
        reports nothing.
        """
        if isinstance(error, (BaseException, str)):
            self.add_system_error_message(str(error))
            return
        failures = list(error)
        if failures:
            self.add_system_error_message(stringify_sendall_errors(failures))

    def add_progress_message(self, file_name: str, total: int) -> int:
        """Append a transfer progress line; return its index."""
        self.add_message(
            ChatMessage(
                f"Sending '{file_name}'",
                MessageKind.PROGRESS,
                progress=ProgressState.started(total),
            )
        )
        return len(self.messages) - 1

    def progress_message_update(self, index: int, increment: int) -> None:
        if not 0 <= index < len(self.messages):
            return
        message = self.messages[index]
        if message.kind is MessageKind.PROGRESS and message.progress is not None:
            message.progress = message.progress.advance(increment)

    def transcript(self, max_messages: int) -> str:
        """The last ``max_messages`` human and AI lines, oldest first."""
        lines: list[str] = []
        for message in reversed(self.messages):
            if len(lines) >= max_messages:
                break
            if message.kind is MessageKind.TEXT:
                lines.append(f"{message.user}: {message.text}")
            elif message.kind is MessageKind.AI_TEXT:
                lines.append(f"{AI_USER}: {message.text}")
        return "\n".join(reversed(lines))

    def recent_human_messages(self, max_messages: int) -> list[str]:
        """Texts of the last ``max_messages`` human messages, oldest first."""
        texts: list[str] = []
        for message in reversed(self.messages):
            if len(texts) >= max_messages:
                break
            if message.kind is MessageKind.TEXT:
                texts.append(message.text)
        texts.reverse()
        return texts

    def set_ai_disabled(self) -> None:
        self.ai_state = AiState(AiStatus.DISABLED)
        self.ai_thinking = False
        self.abort_handle = None

    # --- trust ------------------------------------------------------------

    def set_trusted_peer_fingerprints(self, fingerprints: Iterable[str]) -> None:
        self._trusted_fingerprints = set(fingerprints)

    def trust_peer_fingerprint(self, fingerprint: str) -> None:
        self._trusted_fingerprints.add(fingerprint)

    def untrust_peer_fingerprint(self, fingerprint: str) -> None:
        self._trusted_fingerprints.discard(fingerprint)

    def is_trusted_peer(self, fingerprint: str) -> bool:
        return fingerprint in self._trusted_fingerprints

    def trusted_peer_fingerprints(self) -> list[str]:
        """Trusted fingerprints in sorted order."""
        return sorted(self._trusted_fingerprints)

    # --- skills -----------------------------------------------------------

    def queue_skill_confirmation(self, pending: Any) -> None:
        self.pending_confirmation = pending

    def take_pending_confirmation(self) -> Any:
        """Return the pending confirmation and clear it."""
        pending, self.pending_confirmation = self.pending_confirmation, None
        return pending

    def clear_pending_confirmation(self) -> None:
        self.pending_confirmation = None

    def set_skill_proposals(
        self,
        skill_names: Iterable[str],
        source_peer: str | None = None,
        trusted: bool = False,
        source_fingerprint: str | None = None,
    ) -> None:
        """Replace the proposals with ``skill_names``, numbered from 1."""
        self.skill_proposals = [
            SkillProposal(
                id=number,
                skill_name=name,
                source_peer=source_peer,
                source_fingerprint=source_fingerprint,
                trusted=trusted,
            )
            for number, name in enumerate(skill_names, start=1)
        ]

    def set_skill_proposal_trust(self, source_peer: str, trusted: bool) -> None:
        for proposal in self.skill_proposals:
            if proposal.source_peer == source_peer:
                proposal.trusted = trusted

    def set_skill_proposal_trust_by_fingerprint(self, fingerprint: str, trusted: bool) -> None:
        for proposal in self.skill_proposals:
            if proposal.source_fingerprint == fingerprint:
                proposal.trusted = trusted

    def clear_skill_proposals(self) -> None:
        self.skill_proposals.clear()

    def find_skill_proposal(self, proposal_id: int) -> SkillProposal | None:
        return next((p for p in self.skill_proposals if p.id == proposal_id), None)

    # --- room list --------------------------------------------------------

    def scroll_room_list(self, movement: ScrollMovement) -> None:
        if movement is ScrollMovement.UP:
            self.room_list_scroll = max(self.room_list_scroll - 1, 0)
        elif movement is ScrollMovement.DOWN:
            self.room_list_scroll += 1

    def reset_room_list_scroll(self) -> None:
        self.room_list_scroll = 0