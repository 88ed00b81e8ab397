"""Core value types shared by the chat state and its views."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SystemMessageType(Enum):
    """Severity of a system message shown in the chat panel."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ProgressState:
    """Progress of a file transfer.

    A transfer that has not moved yet has ``current`` set to ``None``.
    """

    total: int
    current: int | None = None
    completed: bool = False

    @classmethod
    def started(cls, total: int) -> ProgressState:
        """A transfer of ``total`` bytes that has not begun."""
        return cls(total)

    def advance(self, increment: int) -> ProgressState:
        """Return the state after ``increment`` more bytes were sent."""
        if self.completed:
            return self
        if self.current is None:
            return ProgressState(self.total, increment)
        new_current = self.current + increment
        if new_current == self.total:
            return ProgressState(self.total, new_current, completed=True)
        return ProgressState(self.total, new_current)


class AiMode(Enum):
    """How the AI participant behaves in a room."""

    CLERK = "clerk"
    LISTENER = "listener"
    MODERATOR = "moderator"
    OPERATOR = "operator"
    COMPANION = "companion"

    @classmethod
    def parse(cls, value: str) -> AiMode:
        """Parse a lower-case mode name; raise ValueError if unknown."""
        for mode in cls:
            if mode.value == value:
                return mode
        raise ValueError(f"unknown ai mode: {value}")

    def __str__(self) -> str:
        return self.value


class PeerReadiness(Enum):
    CONNECTING = "connecting"
    READY = "ready"


class AiFrequency(Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class AiStatus(Enum):
    IDLE = "idle"
    THINKING = "thinking"
    ACTING = "acting"
    DISABLED = "disabled"
    FAILED = "failed"


@dataclass(frozen=True)
class AiState:
    """Current activity of the AI, with a reason when it failed."""

    status: AiStatus = AiStatus.IDLE
    reason: str = ""

    @classmethod
    def failed(cls, reason: str) -> AiState:
        return cls(AiStatus.FAILED, reason)


class MessageKind(Enum):
    CONNECTION = "connection"
    DISCONNECTION = "disconnection"
    TEXT = "text"
    AI_TEXT = "ai_text"
    SYSTEM = "system"
    PROGRESS = "progress"


@dataclass
class ChatMessage:
    """One entry of the chat log."""

    user: str
    kind: MessageKind
    text: str = ""
    system_type: SystemMessageType | None = None
    progress: ProgressState | None = None
    date: datetime = field(default_factory=datetime.now)

    def rendered_text(self) -> str:
        """Plain text of the message as a reader would see it."""
        if self.kind is MessageKind.CONNECTION:
            return f"{self.user} connected"
        if self.kind is MessageKind.DISCONNECTION:
            return f"{self.user} disconnected"
        if self.kind is MessageKind.PROGRESS:
            return ""
        return self.text


@dataclass
class PeerInfo:
    """What is known about a remote peer."""

    user_name: str
    server_port: int = 0
    node_version: str = "unknown"
    avatar: str = "human_default"


@dataclass
class SkillProposal:
    """A skill suggested by the AI, waiting to be run by id."""

    id: int
    skill_name: str
    source_peer: str | None = None
    source_fingerprint: str | None = None
    trusted: bool = False


def peer_fingerprint(peer: PeerInfo) -> str:
    """Hex SHA-256 of the peer's user name followed by its node version."""
    digest = hashlib.sha256()
    digest.update(peer.user_name.encode("utf-8"))
    digest.update(peer.node_version.encode("utf-8"))
    return digest.hexdigest()


def peer_readiness(peer: PeerInfo) -> PeerReadiness:
    """A peer is ready once it has announced a server port and a version."""
    if peer.server_port == 0 or peer.node_version == "unknown":
        return PeerReadiness.CONNECTING
    return PeerReadiness.READY