"""Raft consensus building blocks: majority and joint quorums, and the unstable log."""

__version__ = "0.7.0"