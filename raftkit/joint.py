"""Joint quorum configurations made of two majority configurations."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from .majority import MajorityConfig
from .quorum import AckIndexer, VoteResult

__all__ = ["JointConfig"]


class JointConfig:
    """Two possibly overlapping majority configurations.

    Decisions require the support of both majorities.
    """

    def __init__(self, voters: Optional[Iterable[int]] = None) -> None:
        self.incoming = MajorityConfig(voters)
        self.outgoing = MajorityConfig()

    @classmethod
    def from_majorities(cls, incoming: MajorityConfig, outgoing: MajorityConfig) -> "JointConfig":
        """Build a joint configuration from two majority configurations."""
        config = cls()
        config.incoming = incoming
        config.outgoing = outgoing
        return config

    def committed_index(self, use_group_commit: bool, acked: AckIndexer) -> tuple[int, bool]:
        """Return the largest index committed in both majorities.

        The flag is true only when both majorities used group commit.
        """
        i_idx, i_gc = self.incoming.committed_index(use_group_commit, acked)
        o_idx, o_gc = self.outgoing.committed_index(use_group_commit, acked)
        return min(i_idx, o_idx), i_gc and o_gc

    def vote_result(self, check: Callable[[int], Optional[bool]]) -> VoteResult:
        """Return the vote outcome; both majorities must vote in favour."""
        incoming = self.incoming.vote_result(check)
        outgoing = self.outgoing.vote_result(check)
        if incoming is VoteResult.WON and outgoing is VoteResult.WON:
            return VoteResult.WON
        if VoteResult.LOST in (incoming, outgoing):
            return VoteResult.LOST
        return VoteResult.PENDING

    def clear(self) -> None:
        """Remove all voters from both majorities."""
        self.incoming.clear()
        self.outgoing.clear()

    def is_singleton(self) -> bool:
        """Tell whether there is exactly one voter and no outgoing config."""
        return len(self.outgoing) == 0 and len(self.incoming) == 1

    def ids(self) -> set[int]:
        """Return the union of the voter IDs of both majorities."""
        return set(self.incoming) | set(self.outgoing)

    def __contains__(self, voter_id: object) -> bool:
        return voter_id in self.incoming or voter_id in self.outgoing

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JointConfig):
            return NotImplemented
        return self.incoming == other.incoming and self.outgoing == other.outgoing

    __hash__ = None  # type: ignore[assignment]

    def describe(self, acked: AckIndexer) -> str:
        """Describe the acknowledged indexes of all voters of both majorities."""
        return MajorityConfig(self.ids()).describe(acked)

    def __repr__(self) -> str:
        return f"JointConfig(incoming={self.incoming!r}, outgoing={self.outgoing!r})"