"""Log entries and snapshot state that have not yet been written to storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from .common import default_logger, fatal

__all__ = [
    "Entry",
    "SnapshotMetadata",
    "Snapshot",
    "Unstable",
    "entry_approximate_size",
]

# Fixed per-entry overhead for the index, term and type fields.
_ENTRY_OVERHEAD = 12

_Logger = Union[logging.Logger, logging.LoggerAdapter]


@dataclass
class Entry:
    """A single Raft log entry."""

    term: int = 0
    index: int = 0
    data: bytes = b""
    context: bytes = b""


@dataclass
class SnapshotMetadata:
    """The log position a snapshot was taken at."""

    index: int = 0
    term: int = 0


@dataclass
class Snapshot:
    """A state machine snapshot together with its metadata."""

    metadata: SnapshotMetadata = field(default_factory=SnapshotMetadata)
    data: bytes = b""

    def is_empty(self) -> bool:
        """Tell whether the snapshot carries no log position."""
        return self.metadata.index == 0


def entry_approximate_size(entry: Entry) -> int:
    """Return the approximate in-memory size of ``entry`` in bytes."""
    return len(entry.data) + len(entry.context) + _ENTRY_OVERHEAD


class Unstable:
    """Entries and snapshot state not yet written to storage.

    ``entries[i]`` has log position ``i + offset``. The offset may be less
    than the highest index in storage, in which case the next write to
    storage has to truncate the log before persisting these entries.
    """

    def __init__(self, offset: int = 0, logger: Optional[_Logger] = None) -> None:
        self.offset = offset
        self.snapshot: Optional[Snapshot] = None
        self.entries: list[Entry] = []
        self.entries_size = 0
        self.logger = logger if logger is not None else default_logger()

    def maybe_first_index(self) -> Optional[int]:
        """Return the first possible entry index if a snapshot is held."""
        if self.snapshot is None:
            return None
        return self.snapshot.metadata.index + 1

    def maybe_last_index(self) -> Optional[int]:
        """Return the last index if there is an unstable entry or snapshot."""
        if self.entries:
            return self.offset + len(self.entries) - 1
        if self.snapshot is not None:
            return self.snapshot.metadata.index
        return None

    def maybe_term(self, idx: int) -> Optional[int]:
        """Return the term of the entry at ``idx``, if known."""
        if idx < self.offset:
            if self.snapshot is None:
                return None
            meta = self.snapshot.metadata
            return meta.term if idx == meta.index else None
        last = self.maybe_last_index()
        if last is None or idx > last:
            return None
        return self.entries[idx - self.offset].term

    def stable_entries(self, index: int, term: int) -> None:
        """Drop the entries once they are stable, moving the offset past them."""
        if self.snapshot is not None:
            fatal(self.logger, "unstable.snap must be stabled before entries")
        if not self.entries:
            fatal(
                self.logger,
                "unstable.slice is empty, expect its last one's index and term "
                f"are {index} and {term}",
            )
        last = self.entries[-1]
        if last.index != index or last.term != term:
            fatal(
                self.logger,
                "the last one of unstable.slice has different index "
                f"{last.index} and term {last.term}, expect {index} {term}",
            )
        self.offset = last.index + 1
        self.entries.clear()
        self.entries_size = 0

    def stable_snap(self, index: int) -> None:
        """Drop the snapshot once it is stable."""
        if self.snapshot is None:
            fatal(
                self.logger,
                f"unstable.snap is none, expect a snapshot with index {index}",
            )
        snap_index = self.snapshot.metadata.index
        if snap_index != index:
            fatal(
                self.logger,
                f"unstable.snap has different index {snap_index}, expect {index}",
            )
        self.snapshot = None

    def restore(self, snap: Snapshot) -> None:
        """Replace everything with ``snap`` without unpacking it."""
        self.entries.clear()
        self.entries_size = 0
        self.offset = snap.metadata.index + 1
        self.snapshot = snap

    def truncate_and_append(self, ents: Iterable[Entry]) -> None:
        """Append ``ents``, truncating overlapping unstable entries first."""
        ents = list(ents)
        if not ents:
            fatal(self.logger, "cannot append an empty list of entries")
        after = ents[0].index
        if after == self.offset + len(self.entries):
            pass
        elif after <= self.offset:
            self.offset = after
            self.entries.clear()
            self.entries_size = 0
        else:
            self.must_check_outofbounds(self.offset, after)
            keep = after - self.offset
            self.entries_size -= sum(
                entry_approximate_size(e) for e in self.entries[keep:]
            )
            del self.entries[keep:]
        self.entries.extend(ents)
        self.entries_size += sum(entry_approximate_size(e) for e in ents)

    def slice(self, lo: int, hi: int) -> list[Entry]:
        """Return the entries with indexes in ``[lo, hi)``."""
        self.must_check_outofbounds(lo, hi)
        return self.entries[lo - self.offset : hi - self.offset]

    def must_check_outofbounds(self, lo: int, hi: int) -> None:
        """Raise if ``[lo, hi)`` is inverted or outside the unstable entries."""
        if lo > hi:
            fatal(self.logger, f"invalid unstable.slice {lo} > {hi}")
        upper = self.offset + len(self.entries)
        if lo < self.offset or hi > upper:
            fatal(
                self.logger,
                f"unstable.slice[{lo}, {hi}] out of bound[{self.offset}, {upper}]",
            )

    def __repr__(self) -> str:
        return (
            f"Unstable(offset={self.offset}, entries={self.entries!r}, "
            f"snapshot={self.snapshot!r})"
        )