import pytest

from raftkit.joint import JointConfig
from raftkit.majority import MajorityConfig
from raftkit.quorum import U64_MAX, Index, VoteResult


def _lookup(values):
    return {k: Index(v) for k, v in values.items()}


@pytest.mark.parametrize(
    "voters, acked",
    [
        ([1, 2, 3], {1: 5, 2: 6}),
        ([1, 2, 3, 4, 5], {1: 2, 2: 2, 3: 2, 4: 4, 5: 5}),
        ([1], {1: 100}),
        ([1, 2], {}),
    ],
)
def test_zero_and_self_joint_match_majority(voters, acked):
    majority = MajorityConfig(voters)
    lookup = _lookup(acked)
    expected = majority.committed_index(False, lookup)
    zero_joint = JointConfig.from_majorities(majority, MajorityConfig())
    self_joint = JointConfig.from_majorities(majority, MajorityConfig(voters))
    assert zero_joint.committed_index(False, lookup) == expected
    assert self_joint.committed_index(False, lookup)[0] == expected[0]


@pytest.mark.parametrize(
    "incoming, outgoing, acked, expected",
    [
        ([1, 2, 3], [2, 3, 4], {1: 5, 2: 6, 3: 7, 4: 1}, 6),
        ([1, 2, 3], [4, 5, 6], {1: 10, 2: 10, 3: 10}, 0),
        ([1, 2, 3], [], {1: 3, 2: 4, 3: 5}, 4),
    ],
)
def test_joint_committed_index_is_symmetric(incoming, outgoing, acked, expected):
    lookup = _lookup(acked)
    forward = JointConfig.from_majorities(MajorityConfig(incoming), MajorityConfig(outgoing))
    backward = JointConfig.from_majorities(MajorityConfig(outgoing), MajorityConfig(incoming))
    assert forward.committed_index(False, lookup)[0] == expected
    assert backward.committed_index(False, lookup) == forward.committed_index(False, lookup)


def test_empty_joint_commits_everything():
    assert JointConfig().committed_index(False, {}) == (U64_MAX, True)


def test_group_commit_flag_requires_both():
    acked = {1: Index(1, 1), 2: Index(2, 2), 3: Index(3, 2)}
    config = JointConfig.from_majorities(MajorityConfig([1, 2, 3]), MajorityConfig())
    assert config.committed_index(True, acked) == (1, True)
    grouped = {1: Index(1, 1), 2: Index(2, 1), 3: Index(3, 1)}
    assert config.committed_index(True, grouped) == (2, False)


@pytest.mark.parametrize(
    "incoming, outgoing, votes, expected",
    [
        ([1, 2, 3], [], {1: True, 2: True}, VoteResult.WON),
        ([1, 2, 3], [3, 4, 5], {1: True, 2: True, 3: True}, VoteResult.PENDING),
        ([1, 2, 3], [3, 4, 5], {1: True, 2: True, 3: True, 4: True}, VoteResult.WON),
        ([1, 2, 3], [3, 4, 5], {1: True, 2: True, 4: False, 5: False}, VoteResult.LOST),
        ([1, 2, 3], [3, 4, 5], {}, VoteResult.PENDING),
    ],
)
def test_joint_vote_result(incoming, outgoing, votes, expected):
    forward = JointConfig.from_majorities(MajorityConfig(incoming), MajorityConfig(outgoing))
    backward = JointConfig.from_majorities(MajorityConfig(outgoing), MajorityConfig(incoming))
    assert forward.vote_result(votes.get) is expected
    assert backward.vote_result(votes.get) is expected


def test_singleton_and_membership():
    config = JointConfig([1])
    assert config.is_singleton()
    assert 1 in config
    assert 2 not in config
    config.outgoing.add(2)
    assert not config.is_singleton()
    assert 2 in config
    assert config.ids() == {1, 2}


def test_clear_and_equality():
    config = JointConfig.from_majorities(MajorityConfig([1, 2]), MajorityConfig([3]))
    assert config == JointConfig.from_majorities(MajorityConfig([2, 1]), MajorityConfig([3]))
    assert config != JointConfig([1, 2])
    config.clear()
    assert config.ids() == set()
    assert config == JointConfig()


def test_describe_uses_union_of_voters():
    config = JointConfig.from_majorities(MajorityConfig([1, 2]), MajorityConfig([2, 3]))
    acked = _lookup({1: 4, 2: 5, 3: 6})
    assert config.describe(acked) == MajorityConfig([1, 2, 3]).describe(acked)
    assert JointConfig().describe({}) == "<empty majority quorum>"