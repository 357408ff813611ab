"""
Session timers: the rest countdown and the elapsed-time ticker.

Both run as asyncio tasks owned by the object that created them. Each
timer has at most one task; starting it again replaces the previous task,
and a replaced task never updates the timer's state again.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from domain.services.session_metrics import elapsed_seconds_between, format_timer

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RestCountdown:
    """
    Counts down the rest interval after a completed set.

    Decrements remaining_seconds once per tick and clears itself at zero.
    start() while a countdown is running restarts it with the new value.
    """

    def __init__(
        self,
        tick_seconds: float = TICK_SECONDS,
        on_tick: Optional[Callable[[int], None]] = None,
    ):
        self._tick_seconds = tick_seconds
        self._on_tick = on_tick
        self._remaining = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def is_resting(self) -> bool:
        return self._remaining > 0 and self._task is not None and not self._task.done()

    @property
    def label(self) -> str:
        """Remaining rest as M:SS for display."""
        return format_timer(self._remaining)

    def start(self, seconds: int) -> None:
        """Begin a countdown, cancelling any countdown already running."""
        self._cancel()
        if seconds <= 0:
            self._remaining = 0
            return
        self._remaining = int(seconds)
        self._task = asyncio.get_running_loop().create_task(self._run())

    def skip(self) -> None:
        """End the current countdown immediately."""
        self._cancel()
        self._remaining = 0

    def cancel(self) -> None:
        self.skip()

    async def wait(self) -> None:
        """Wait for the current countdown to finish (or be cancelled)."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    def _cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        me = asyncio.current_task()
        while self._remaining > 0:
            await asyncio.sleep(self._tick_seconds)
            if self._task is not me:
                return
            self._remaining -= 1
            if self._on_tick is not None:
                self._on_tick(self._remaining)
        logger.debug("Rest countdown finished")


class ElapsedTicker:
    """
    Tracks time since a session started.

    While running, elapsed_seconds is recomputed from started_at on every
    tick rather than incremented, so it stays correct across missed ticks.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        tick_seconds: float = TICK_SECONDS,
    ):
        self._clock = clock
        self._tick_seconds = tick_seconds
        self._started_at: Optional[datetime] = None
        self._elapsed = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, started_at: datetime) -> None:
        """Start ticking from started_at, replacing any running ticker."""
        self.stop()
        self._started_at = started_at
        self._refresh()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Stop ticking; elapsed_seconds keeps its last value."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def freeze(self, seconds: int) -> None:
        """Stop and pin elapsed_seconds to a fixed value (completed sessions)."""
        self.stop()
        self._elapsed = max(0, int(seconds))

    def reset(self) -> None:
        self.stop()
        self._started_at = None
        self._elapsed = 0

    def _refresh(self) -> None:
        self._elapsed = elapsed_seconds_between(self._started_at, self._clock())

    async def _run(self) -> None:
        me = asyncio.current_task()
        while True:
            await asyncio.sleep(self._tick_seconds)
            if self._task is not me:
                return
            self._refresh()
