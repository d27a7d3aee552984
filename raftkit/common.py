"""Shared helpers: quorum sizing, logging setup and fatal errors."""

from __future__ import annotations

import logging
import threading
from typing import Any, Mapping, NoReturn

__all__ = ["RaftPanic", "majority", "default_logger", "fatal"]

_LOGGER_NAME = "raftkit"


class RaftPanic(RuntimeError):
    """Raised when an invariant of the consensus state is violated."""


def majority(total: int) -> int:
    """Return the number of members that forms a majority of ``total``."""
    if total < 0:
        raise ValueError(f"group size must not be negative, got {total}")
    return total // 2 + 1


def _base_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
    return logger


def default_logger(case: str | None = None) -> logging.LoggerAdapter:
    """Return the package logger tagged with a ``case`` context value.

    When ``case`` is not given it is taken from the last ``:``-separated part
    of the current thread's name.
    """
    if case is None:
        name = threading.current_thread().name
        case = name.split(":")[-1] if name else None
    extra: dict[str, Any] = {"case": case} if case is not None else {}
    return logging.LoggerAdapter(_base_logger(), extra)


def _format_kv(extra: Mapping[str, Any]) -> str:
    return ", ".join(f"{key}: {value}" for key, value in extra.items())


def fatal(logger: logging.Logger | logging.LoggerAdapter | None, message: str) -> NoReturn:
    """Raise :class:`RaftPanic` with ``message`` and the logger's context appended."""
    extra = getattr(logger, "extra", None) or {}
    context = _format_kv(extra)
    raise RaftPanic(f"{message}, {context}" if context else str(message))