from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from shipper.models import CycleOutcome, Settings
from shipper.pipeline import run_cycle

logger = logging.getLogger(__name__)

CycleFn = Callable[[Settings], Awaitable[CycleOutcome]]

class Scheduler:
    """Fixed-interval ticker that runs one cycle per tick.

    The first cycle fires one interval after ``run`` starts. Cycles never
    overlap: ticks that fall while a cycle is still running are dropped and
    the next cycle waits for the following tick. An optional
    ``cycle_timeout`` bounds every cycle.
    """

    def __init__(self, settings: Settings, cycle: CycleFn = run_cycle) -> None:
        self.settings = settings
        self._cycle = cycle
        self._stop = asyncio.Event()
        self.cycles_run = 0
        self.last_outcome: Optional[CycleOutcome] = None

    def stop(self) -> None:
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    async def _sleep_until(self, deadline: float) -> bool:
        """Wait for ``deadline`` on the loop clock; True if stopped meanwhile."""
        delay = max(0.0, deadline - asyncio.get_running_loop().time())
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True

    async def tick(self) -> CycleOutcome:
        timeout = self.settings.cycle_timeout
        try:
            if timeout:
                outcome = await asyncio.wait_for(self._cycle(self.settings), timeout=timeout)
            else:
                outcome = await self._cycle(self.settings)
        except asyncio.TimeoutError:
            logger.error("Cycle exceeded its deadline of %ss and was cancelled", timeout)
            outcome = CycleOutcome(status="aborted", error=f"cycle deadline of {timeout}s exceeded")
        except Exception as e:
            logger.exception("Unexpected error during cycle")
            outcome = CycleOutcome(status="aborted", error=str(e))

        self.cycles_run += 1
        self.last_outcome = outcome
        logger.debug("Cycle %d finished: %s", self.cycles_run, outcome.status)
        return outcome

    async def run(self, max_cycles: Optional[int] = None) -> None:
        loop = asyncio.get_running_loop()
        interval = self.settings.check_interval
        next_tick = loop.time() + interval
        logger.info("Shipper started, checking %s every %ss", self.settings.path_pattern, interval)

        while not self.stopped:
            if await self._sleep_until(next_tick):
                break
            await self.tick()
            if max_cycles is not None and self.cycles_run >= max_cycles:
                break

            next_tick += interval
            now = loop.time()
            if next_tick <= now:
                missed = int((now - next_tick) // interval) + 1
                logger.warning("Cycle overran the check interval, dropping %d tick(s)", missed)
                next_tick += missed * interval

        logger.info("Shipper stopped after %d cycle(s)", self.cycles_run)
