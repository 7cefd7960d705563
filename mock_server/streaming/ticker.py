"""Ticker: a stoppable periodic timer for a single stream session."""

from __future__ import annotations

import asyncio
from typing import AsyncGenerator


class Ticker:
    """Yields once per ``interval`` seconds until ``stop()`` is called.

    Only one wait is ever pending. ``stop()`` wakes that wait immediately so
    no tick is produced after it.
    """

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.fired = 0
        self._stopped = asyncio.Event()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def stop(self) -> None:
        self._stopped.set()

    async def ticks(self) -> AsyncGenerator[int, None]:
        """Async generator yielding the 1-based tick number."""
        while not self._stopped.is_set():
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                self.fired += 1
                yield self.fired
