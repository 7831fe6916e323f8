"""Periodic tick driver for in-process hosts."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional


logger = logging.getLogger(__name__)

# Receives the round id the countdown was started for; returns True once the
# session no longer wants ticks.
TickFn = Callable[[int], bool]


class Countdown:
    """Calls ``tick(round_id)`` every ``interval`` seconds until told to stop."""

    def __init__(self, tick: TickFn, *, interval: float = 1.0):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._tick = tick
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, round_id: int) -> asyncio.Task:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(round_id))
        return self._task

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def _run(self, round_id: int) -> None:
        while True:
            await asyncio.sleep(self.interval)
            if self._tick(round_id):
                logger.debug("Countdown for round %d stopped", round_id)
                return


__all__ = ["Countdown", "TickFn"]
