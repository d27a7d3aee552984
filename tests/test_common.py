import logging
import threading

import pytest

from raftkit.common import RaftPanic, default_logger, fatal, majority


def test_majority_pinned_values():
    assert majority(1) == 1
    assert majority(3) == 2
    assert majority(5) == 3


@pytest.mark.parametrize("total", range(0, 40))
def test_majority_is_smallest_strict_majority(total):
    q = majority(total)
    assert 2 * q > total
    assert 2 * (q - 1) <= total


def test_majority_rejects_negative():
    with pytest.raises(ValueError):
        majority(-1)


def test_default_logger_uses_given_case():
    logger = default_logger("my_case")
    assert logger.extra["case"] == "my_case"
    assert logger.logger.name == "raftkit"


def test_default_logger_case_from_thread_name():
    current = threading.current_thread()
    original_name = current.name
    current.name = "suite::module::test_thing"
    try:
        logger = default_logger()
    finally:
        current.name = original_name
    assert logger.extra["case"] == "test_thing"


def test_default_logger_shares_one_handler():
    first = default_logger("a")
    second = default_logger("b")
    assert first.logger is second.logger
    assert first.extra["case"] == "a"
    assert second.extra["case"] == "b"
    assert len(first.logger.handlers) == 1


def test_fatal_raises_with_context():
    logger = default_logger("node-7")
    with pytest.raises(RaftPanic) as info:
        fatal(logger, "broken invariant")
    assert str(info.value) == "broken invariant, case: node-7"


def test_fatal_without_context():
    adapter = logging.LoggerAdapter(logging.getLogger("raftkit"), {})
    with pytest.raises(RaftPanic) as info:
        fatal(adapter, "plain failure")
    assert str(info.value) == "plain failure"


def test_fatal_with_plain_logger():
    with pytest.raises(RaftPanic, match="^boom$"):
        fatal(logging.getLogger("raftkit"), "boom")


def test_raft_panic_is_runtime_error():
    with pytest.raises(RuntimeError):
        fatal(None, "anything")