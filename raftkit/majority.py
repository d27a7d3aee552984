"""Majority quorum configurations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional

from .common import majority
from .quorum import U64_MAX, AckIndexer, Index, VoteResult, acked_index

__all__ = ["MajorityConfig"]


class MajorityConfig:
    """A set of voter IDs that uses majority quorums to make decisions."""

    def __init__(self, voters: Optional[Iterable[int]] = None) -> None:
        self._voters: set[int] = set(voters) if voters is not None else set()

    def ids(self) -> Iterator[int]:
        """Iterate over the voter IDs."""
        return iter(self._voters)

    def slice(self) -> list[int]:
        """Return the voter IDs as a sorted list."""
        return sorted(self._voters)

    def raw_slice(self) -> list[int]:
        """Return the voter IDs as a list in no particular order."""
        return list(self._voters)

    def committed_index(self, use_group_commit: bool, acked: AckIndexer) -> tuple[int, bool]:
        """Compute the committed index from the acknowledged indexes.

        The flag tells whether the index was computed by the group commit
        algorithm. An empty configuration yields the maximum index so that it
        behaves neutrally inside a joint quorum.
        """
        if not self._voters:
            return U64_MAX, True

        matched = [acked_index(acked, voter) or Index() for voter in sorted(self._voters)]
        matched.sort(key=lambda item: item.index, reverse=True)

        quorum_index = matched[majority(len(matched)) - 1]
        if not use_group_commit:
            return quorum_index.index, False

        quorum_commit_index = quorum_index.index
        checked_group_id = quorum_index.group_id
        single_group = True
        for item in matched:
            if item.group_id == 0:
                single_group = False
                continue
            if checked_group_id == 0:
                checked_group_id = item.group_id
                continue
            if checked_group_id == item.group_id:
                continue
            return min(item.index, quorum_commit_index), True
        if single_group:
            return quorum_commit_index, False
        return matched[-1].index, False

    def vote_result(self, check: Callable[[int], Optional[bool]]) -> VoteResult:
        """Tally yes/no/missing votes reported by ``check`` for each voter."""
        if not self._voters:
            # An empty configuration wins by convention, so that a half
            # populated joint quorum behaves like a majority quorum.
            return VoteResult.WON

        yes = missing = 0
        for voter in self._voters:
            vote = check(voter)
            if vote is True:
                yes += 1
            elif vote is None:
                missing += 1
        quorum = majority(len(self._voters))
        if yes >= quorum:
            return VoteResult.WON
        if yes + missing >= quorum:
            return VoteResult.PENDING
        return VoteResult.LOST

    def describe(self, acked: AckIndexer) -> str:
        """Return a multi-line picture of the acknowledged indexes.

        Each line shows a bar whose length grows with the voter's index, the
        index itself and the voter ID; ``?`` marks a voter with no index.
        """
        n = len(self._voters)
        if n == 0:
            return "<empty majority quorum>"

        @dataclass
        class _Row:
            voter_id: int
            idx: Optional[Index]
            bar: int = 0

            @property
            def value(self) -> int:
                return (self.idx or Index()).index

        rows = [_Row(voter, acked_index(acked, voter)) for voter in self._voters]
        rows.sort(key=lambda row: (row.value, row.voter_id))
        for position, (previous, current) in enumerate(zip(rows, rows[1:]), start=1):
            if previous.value < current.value:
                current.bar = position
        rows.sort(key=lambda row: row.voter_id)

        lines = [" " * n + "    idx\n"]
        for row in rows:
            if row.idx is not None:
                prefix = "x" * row.bar + ">" + " " * (n - row.bar)
                shown = str(row.idx)
            else:
                prefix = "?" + " " * n
                shown = str(Index())
            lines.append(f"{prefix} {shown:>5}    (id={row.voter_id})\n")
        return "".join(lines)

    def add(self, voter_id: int) -> None:
        """Add a voter."""
        self._voters.add(voter_id)

    def discard(self, voter_id: int) -> None:
        """Remove a voter if present."""
        self._voters.discard(voter_id)

    def clear(self) -> None:
        """Remove all voters."""
        self._voters.clear()

    def __contains__(self, voter_id: object) -> bool:
        return voter_id in self._voters

    def __len__(self) -> int:
        return len(self._voters)

    def __iter__(self) -> Iterator[int]:
        return iter(self._voters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MajorityConfig):
            return NotImplemented
        return self._voters == other._voters

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "(" + " ".join(str(voter) for voter in sorted(self._voters)) + ")"

    def __repr__(self) -> str:
        return f"MajorityConfig({sorted(self._voters)!r})"