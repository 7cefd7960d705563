"""Exceptions raised by the mock server's streaming sessions."""

from __future__ import annotations

from enum import Enum


class TerminationReason(str, Enum):
    """How the peer went away while a stream was running."""

    CLOSE = "close"
    ABORT = "abort"


class StreamTerminationError(Exception):
    """Raised when a stream's peer disconnects, aborts, or a write fails.

    Recovered inside the session: the ticker is stopped and the session is
    moved to its cancelled state. Never surfaced to an HTTP caller, since the
    channel is already gone by the time it is raised.
    """

    def __init__(self, job_name: str, reason: TerminationReason):
        self.job_name = job_name
        self.reason = reason
        super().__init__(f"{job_name} stream terminated by peer ({reason.value})")
