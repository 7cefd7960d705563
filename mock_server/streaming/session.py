"""StreamSession: lifecycle of one simulated training/testing job over SSE."""

from __future__ import annotations

import asyncio
import logging
import random
from enum import Enum
from typing import AsyncGenerator, Optional
from uuid import uuid4

from mock_server.exceptions import StreamTerminationError, TerminationReason
from mock_server.models.params import TestingParams, TrainingParams

from .events import SSEEvent, StreamEventType, end_event
from .payloads import testing_progress, training_progress
from .ticker import Ticker

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class StreamSession:
    """Drives a bounded sequence of synthetic progress events.

    Emits one ``started`` event, then one ``progress`` event per tick until
    ``limit`` progress events have gone out; the following tick emits ``end``
    and completes the session. A peer close/abort cancels it instead.

    The session is the only producer for its stream and owns its ticker, so
    events are strictly ordered and nothing is emitted after a terminal
    transition.
    """

    job_name = "job"
    limit = 0

    def __init__(
        self,
        params: TrainingParams,
        *,
        interval: float = 1.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.id = uuid4().hex[:8]
        self.params = params
        self.tick_count = 0
        self.state = SessionState.RUNNING
        self.termination: Optional[StreamTerminationError] = None
        self.rng = rng or random.Random()
        self.ticker = Ticker(interval)

    @property
    def is_running(self) -> bool:
        return self.state is SessionState.RUNNING

    def started_event(self) -> SSEEvent:
        return SSEEvent(event_type=StreamEventType.STARTED, data=self.params.started_payload())

    def progress_event(self) -> SSEEvent:
        raise NotImplementedError

    def terminate(self, reason: TerminationReason) -> bool:
        """Cancel the session because the peer went away.

        Returns False when the session had already reached a terminal state.
        """
        if not self.is_running:
            return False
        self.termination = StreamTerminationError(self.job_name, reason)
        logger.info(
            "%s interrupted for algorithm %s (session %s, reason=%s, after %d/%d ticks)",
            self.job_name,
            self.params.algorithm_name,
            self.id,
            reason.value,
            self.tick_count,
            self.limit,
        )
        self._finish(SessionState.CANCELLED)
        return True

    def _finish(self, state: SessionState) -> None:
        self.state = state
        self.ticker.stop()

    async def events(self) -> AsyncGenerator[str, None]:
        """Async generator yielding SSE strings for this session.

        A cancellation while suspended (Starlette cancels the response task
        when the client disconnects) is a peer close. Being closed by the
        consumer before the end event (the transport dropped the stream after
        a failed write) is a peer abort.
        """
        logger.info(
            "%s started for algorithm %s (session %s)",
            self.job_name,
            self.params.algorithm_name,
            self.id,
        )
        try:
            yield self.started_event().to_sse_string()

            async for _ in self.ticker.ticks():
                if not self.is_running:
                    break
                if self.tick_count >= self.limit:
                    frame = end_event().to_sse_string()
                    self._finish(SessionState.COMPLETED)
                    logger.info("%s finished (session %s)", self.job_name, self.id)
                    yield frame
                    break
                self.tick_count += 1
                yield self.progress_event().to_sse_string()
        except asyncio.CancelledError:
            self.terminate(TerminationReason.CLOSE)
            raise
        except GeneratorExit:
            self.terminate(TerminationReason.ABORT)
            raise
        finally:
            self.ticker.stop()


class TrainingSession(StreamSession):
    job_name = "Training"
    limit = 10

    def progress_event(self) -> SSEEvent:
        return SSEEvent(
            event_type=StreamEventType.PROGRESS,
            data=training_progress(self.tick_count, self.rng),
        )


class TestingSession(StreamSession):
    job_name = "Testing"
    limit = 5

    def __init__(
        self,
        params: TestingParams,
        *,
        interval: float = 1.0,
        rng: Optional[random.Random] = None,
        artifacts_root: str = "/mock_image",
    ) -> None:
        super().__init__(params, interval=interval, rng=rng)
        self.artifacts_root = artifacts_root

    def progress_event(self) -> SSEEvent:
        return SSEEvent(
            event_type=StreamEventType.PROGRESS,
            data=testing_progress(self.tick_count, self.params.env_id, self.artifacts_root),
        )
