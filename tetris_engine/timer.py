"""Periodic gravity timer for asyncio-based front ends."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class GravityTimer:
    """Calls ``on_tick`` every ``interval`` seconds from a background task.

    The callback returns False to stop the timer (e.g. on game over).
    ``restart`` re-arms the countdown so a full interval elapses before the
    next tick; it never interrupts a tick that is already running.
    """

    def __init__(self, interval: float, on_tick: Callable[[], Awaitable[bool]]):
        """Initialize the timer.

        Args:
            interval: Seconds between ticks
            on_tick: Coroutine function run on every tick
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.on_tick = on_tick
        self.task: Optional[asyncio.Task] = None
        self.ticks = 0
        self._rearm = asyncio.Event()
        self._stopping = False

    @property
    def running(self) -> bool:
        return self.task is not None and not self.task.done()

    def start(self) -> None:
        """Start ticking if not already running."""
        if self.running:
            return
        self._stopping = False
        self._rearm.clear()
        self.task = asyncio.create_task(self._run())

    def restart(self) -> None:
        """Re-arm the countdown, starting the timer if it is stopped."""
        if self.running:
            # Also revokes a pending stop() the loop has not acted on yet
            self._stopping = False
            self._rearm.set()
        else:
            self.start()

    def stop(self) -> None:
        """Stop after the current tick (if any) finishes."""
        if self.running:
            self._stopping = True
            self._rearm.set()

    def cancel(self) -> None:
        """Stop immediately, interrupting the background task."""
        if self.task and not self.task.done():
            self.task.cancel()
        self.task = None

    async def _run(self) -> None:
        try:
            while not self._stopping:
                try:
                    await asyncio.wait_for(self._rearm.wait(), timeout=self.interval)
                except asyncio.TimeoutError:
                    self.ticks += 1
                    if not await self.on_tick():
                        break
                else:
                    self._rearm.clear()
            logger.info("[Gravity] Stopped after %d ticks", self.ticks)
        except asyncio.CancelledError:
            logger.debug("[Gravity] Cancelled after %d ticks", self.ticks)
            raise
