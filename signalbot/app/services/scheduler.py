"""Periodic job runner with a skip-if-busy guard.

Ticks are laid on a fixed grid measured with the event loop clock, so a
slow run does not shift later ticks. A tick that arrives while the
previous run is still in flight is skipped, never queued, so two runs can
never overlap.
"""

import asyncio
import logging
import math
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[Any]]


class PeriodicRunner:
    """Run an async job immediately and then every ``interval`` seconds."""

    def __init__(self, job: Job, interval: float, run_immediately: bool = True):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.job = job
        self.interval = interval
        self.run_immediately = run_immediately

        self.runs_started = 0
        self.ticks_skipped = 0

        self._loop_task: asyncio.Task | None = None
        self._current: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def is_busy(self) -> bool:
        """True while a job run is in flight."""
        return self._current is not None and not self._current.done()

    def start(self) -> None:
        """Start the timer loop on the running event loop."""
        if self.is_running:
            return
        self._loop_task = asyncio.create_task(self._tick_loop())

    async def stop(self) -> None:
        """Stop ticking and wait for an in-flight run to finish."""
        if self._loop_task:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None

        if self._current and not self._current.done():
            logger.info("Waiting for in-flight run to finish")
            await asyncio.gather(self._current, return_exceptions=True)

    def trigger(self) -> bool:
        """
        Start one run unless another one is in flight.

        Returns:
            True if a run was started, False if the tick was skipped
        """
        if self.is_busy:
            self.ticks_skipped += 1
            logger.warning("Previous run still in flight, skipping tick")
            return False

        self.runs_started += 1
        self._current = asyncio.create_task(self._run_job())
        return True

    async def _run_job(self) -> None:
        try:
            await self.job()
        except Exception:
            logger.exception("Scheduled run raised")

    async def _tick_loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        if not self.run_immediately:
            next_tick += self.interval

        while True:
            delay = next_tick - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)

            self.trigger()
            next_tick += self.interval

            # Fell behind the grid (e.g. host suspended): drop missed ticks
            now = loop.time()
            if next_tick < now:
                missed = math.ceil((now - next_tick) / self.interval)
                logger.warning(f"Scheduler behind by {missed} tick(s), realigning")
                next_tick += missed * self.interval
