"""SSE streaming for the simulated training/testing jobs."""

from .events import SSEEvent, StreamEventType
from .session import SessionState, StreamSession, TestingSession, TrainingSession
from .ticker import Ticker

__all__ = [
    "SSEEvent",
    "StreamEventType",
    "SessionState",
    "StreamSession",
    "TrainingSession",
    "TestingSession",
    "Ticker",
]
