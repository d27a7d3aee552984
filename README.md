# raftkit

Core pieces of the Raft consensus algorithm for Python. It covers majority
and joint quorum arithmetic. It also has the in-memory log of entries and of a
snapshot that have not yet been written to stable storage.

## Installation

```
pip install raftkit
```

To run the tests, install the `test` extra and run `pytest`.

## Quorums

`raftkit.majority.MajorityConfig` is a set of voter ids that decides by
simple majority. `raftkit.joint.JointConfig` combines an `incoming` majority
and an `outgoing` majority. A cluster uses such a pair while it changes
membership, and every decision then needs both majorities.

```python
from raftkit.majority import MajorityConfig
from raftkit.joint import JointConfig
from raftkit.quorum import Index, VoteResult

voters = MajorityConfig({1, 2, 3})
acked = {1: Index(5), 2: Index(3), 3: Index(1)}

index, _ = voters.committed_index(False, acked)
assert index == 3

votes = {1: True, 2: False}
assert voters.vote_result(votes.get) == VoteResult.PENDING

joint = JointConfig.from_majorities(MajorityConfig({1, 2, 3}), MajorityConfig({3, 4, 5}))
print(sorted(joint.ids()))  # [1, 2, 3, 4, 5]
```

### Committed index

`committed_index(use_group_commit, acked)` takes a mapping from voter id to
`raftkit.quorum.Index`. A voter that is missing from the mapping counts as
index 0. It returns a pair: the largest index acknowledged by a quorum, and a
flag.

- An empty `MajorityConfig` returns `(2**64 - 1, True)`. This value is
  `raftkit.quorum.U64_MAX`, and it lets the empty half of a joint
  configuration stay neutral.
- When group commit is off, the flag is always `False`.
- When group commit is on, each `Index` may carry a `group_id`. The quorum
  index is only accepted once the acknowledgements span more than one group.
  In that case the flag is `True`.

For a `JointConfig`, the index is the smaller of the two results. The flag is
`True` only if it is `True` for both halves.

### Votes

`vote_result(check)` takes a callable. It maps a voter id to `True` (yes),
`False` (no) or `None` (not yet voted). It returns one of these
`VoteResult` values:

- `WON`
- `LOST`
- `PENDING`

An empty `MajorityConfig` always wins. A `JointConfig` wins only if both
halves win. It loses if either half loses.

### Other operations

`MajorityConfig` supports the following:

- `add`, `discard`, `clear`
- `in`, `len()`, iteration and equality
- `slice()`, which returns the ids sorted
- `raw_slice()`, which returns the ids unordered
- `ids()`, which returns an iterator over the ids

`JointConfig` supports `clear`, `is_singleton`, `ids()` (the union of both
halves), `in` and equality.

Both classes have `describe(acked)`, which returns a small text chart of the
acknowledged indexes. This helps when debugging. `Index` prints as its number,
or as `∞` for the maximum index. When it carries a group, the group id comes
first in brackets, for example `[2]7`.

## The unstable log

`raftkit.unstable.Unstable` holds log entries (`Entry`) and an optional
`Snapshot` (with its `SnapshotMetadata`) that are not yet persisted.

```python
from raftkit.common import default_logger
from raftkit.unstable import Entry, Unstable

log = Unstable(5, default_logger(None))
log.truncate_and_append([Entry(index=5, term=1), Entry(index=6, term=1)])
assert log.maybe_last_index() == 6
assert log.maybe_term(5) == 1

log.stable_entries(6, 1)
assert log.offset == 7
```

`Unstable` has these methods:

- `maybe_first_index`, `maybe_last_index` and `maybe_term` return `None` when
  the answer is not known.
- `truncate_and_append` replaces any overlapping entries.
- `slice(lo, hi)` returns the entries in `[lo, hi)`.
- `restore` replaces everything with a snapshot.
- `stable_entries` and `stable_snap` drop state once it has been persisted.

`entries_size` keeps the running total of `entry_approximate_size` over all
held entries.

An operation that would break the log's invariants raises
`raftkit.common.RaftPanic`. Examples are:

- stabilising entries or a snapshot that do not match
- stabilising entries while a snapshot is still held
- appending an empty list
- slicing out of bounds

## Helpers

- `raftkit.common.majority(n)` gives the quorum size for `n` voters.
- `default_logger(case)` returns a `logging.LoggerAdapter` on the `raftkit`
  logger, tagged with a `case` value. If `case` is `None`, the value is taken
  from the current thread's name.
- `fatal(logger, message)` raises `RaftPanic`, with the logger's context
  appended to the message.

## What this package does not do

This package has no Raft node. It has no elections, message stepping,
replication, persistent storage or network transport. It provides only the
quorum calculations and the unstable-log bookkeeping that such a node would
be built on.