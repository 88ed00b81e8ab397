"""Who is connected: endpoints, their user names and what they announced."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable

from triadchat.models import PeerInfo, PeerReadiness, peer_fingerprint, peer_readiness


def collect_peer_info(local_user_name: str, peers: Iterable[PeerInfo]) -> list[tuple[str, str]]:
    """(name, avatar) of remote peers, sorted by name, one entry per name.

    The local user is left out; of several peers with the same name the
    first one seen wins.
    """
    remote = sorted(
        (peer for peer in peers if peer.user_name != local_user_name),
        key=lambda peer: peer.user_name,
    )
    result: list[tuple[str, str]] = []
    for peer in remote:
        if result and result[-1][0] == peer.user_name:
            continue
        result.append((peer.user_name, peer.avatar))
    return result


@dataclass
class PeerDirectory:
    """Connected users by endpoint, the peer details they announced, and
    a stable colour id for every user name ever seen."""

    users: dict[Hashable, str] = field(default_factory=dict)
    peers: dict[Hashable, PeerInfo] = field(default_factory=dict)
    users_id: dict[str, int] = field(default_factory=dict)
    _next_user_id: int = 0

    def connect(self, endpoint: Hashable, user: str) -> bool:
        """Register ``user`` at ``endpoint``.

        Returns ``True`` when this is a new connection worth announcing,
        ``False`` when it is already known or the same user is ready
        elsewhere.
        """
        if self.users.get(endpoint) == user:
            return False
        if any(
            known != endpoint
            and peer.user_name == user
            and peer_readiness(peer) is PeerReadiness.READY
            for known, peer in self.peers.items()
        ):
            return False
        self._remove_duplicates(endpoint, user)
        self.users[endpoint] = user
        self.peers.setdefault(endpoint, PeerInfo(user_name=user))
        if user not in self.users_id:
            self.users_id[user] = self._next_user_id
            self._next_user_id += 1
        return True

    def disconnect(self, endpoint: Hashable) -> str | None:
        """Forget ``endpoint``; return the user that was there, if any."""
        user = self.users.pop(endpoint, None)
        if user is not None:
            self.peers.pop(endpoint, None)
        return user

    def record(self, endpoint: Hashable, peer: PeerInfo) -> None:
        """Store what the peer at ``endpoint`` announced about itself."""
        self._remove_duplicates(endpoint, peer.user_name)
        self.peers[endpoint] = peer

    def user_name(self, endpoint: Hashable) -> str | None:
        return self.users.get(endpoint)

    def endpoints(self) -> list[Hashable]:
        """Endpoints of every connected user."""
        return list(self.users)

    def fingerprint(self, endpoint: Hashable) -> str | None:
        peer = self.peers.get(endpoint)
        return None if peer is None else peer_fingerprint(peer)

    def names(self) -> list[str]:
        """Sorted, distinct names of known peers."""
        return sorted({peer.user_name for peer in self.peers.values()})

    def endpoint_by_name(self, user_name: str) -> Hashable | None:
        """Endpoint of a peer named ``user_name``, preferring a ready one."""
        best: Hashable | None = None
        best_ready = False
        found = False
        for endpoint, peer in self.peers.items():
            if peer.user_name != user_name:
                continue
            ready = peer_readiness(peer) is PeerReadiness.READY
            if not found or ready >= best_ready:
                best, best_ready, found = endpoint, ready, True
        return best

    def fingerprint_by_name(self, user_name: str) -> str | None:
        endpoint = self.endpoint_by_name(user_name)
        if endpoint is None:
            return None
        return self.fingerprint(endpoint)

    def readiness(self, endpoint: Hashable) -> PeerReadiness:
        peer = self.peers.get(endpoint)
        return PeerReadiness.CONNECTING if peer is None else peer_readiness(peer)

    def is_ready(self, user_name: str) -> bool:
        """Whether any peer named ``user_name`` is ready."""
        return any(
            peer.user_name == user_name and peer_readiness(peer) is PeerReadiness.READY
            for peer in self.peers.values()
        )

    def info_list(self, local_user_name: str) -> list[tuple[str, str]]:
        """(name, avatar) of every remote peer, sorted and distinct by name."""
        return collect_peer_info(local_user_name, self.peers.values())

    def _remove_duplicates(self, endpoint: Hashable, user: str) -> None:
        duplicates = [
            known for known, name in self.users.items() if known != endpoint and name == user
        ]
        for known in duplicates:
            del self.users[known]
            self.peers.pop(known, None)