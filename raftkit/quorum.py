"""Shared quorum types: vote outcomes and acknowledged log positions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Mapping, Optional

__all__ = ["U64_MAX", "VoteResult", "Index", "AckIndexer", "acked_index"]

U64_MAX = 2**64 - 1


class VoteResult(enum.Enum):
    """The outcome of a vote."""

    PENDING = "pending"
    """Neither "yes" nor "no" has reached a quorum yet."""
    LOST = "lost"
    """A quorum has voted "no"."""
    WON = "won"
    """A quorum has voted "yes"."""

    def __str__(self) -> str:
        return {
            VoteResult.WON: "VoteWon",
            VoteResult.LOST: "VoteLost",
            VoteResult.PENDING: "VotePending",
        }[self]


@dataclass(frozen=True)
class Index:
    """A Raft log position acknowledged by a voter, with its commit group."""

    index: int = 0
    group_id: int = 0

    def __str__(self) -> str:
        value = "∞" if self.index == U64_MAX else str(self.index)
        if self.group_id == 0:
            return value
        return f"[{self.group_id}]{value}"

    def __repr__(self) -> str:
        return str(self)


AckIndexer = Mapping[int, Index]


def acked_index(acked: AckIndexer, voter_id: int) -> Optional[Index]:
    """Return the index acknowledged by ``voter_id``, or None if unknown."""
    return acked.get(voter_id)