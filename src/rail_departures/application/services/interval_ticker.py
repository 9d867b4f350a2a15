"""Fixed-period ticker for the refresh loop."""

from __future__ import annotations

import asyncio
import logging

from rail_departures.domain.contracts.ticker import TickerProtocol

logger = logging.getLogger(__name__)


class IntervalTicker(TickerProtocol):
    """Ticks on a fixed grid of ``anchor + n * period`` on the event loop clock.

    The grid is anchored on the first call to ``tick``. Deadlines are not
    re-armed from the time a refresh took, so cycle starts do not drift. If a
    refresh overruns one or more deadlines, the missed ticks collapse into a
    single immediate tick and the next deadline stays on the original grid.
    """

    def __init__(self, period_seconds: float) -> None:
        """Initialize the ticker.

        Args:
            period_seconds: Seconds between ticks, must be positive.
        """
        if period_seconds <= 0:
            raise ValueError("period_seconds must be positive")
        self.period_seconds = period_seconds
        self._next_deadline: float | None = None

    async def tick(self) -> None:
        """Wait for the next deadline on the grid."""
        loop = asyncio.get_running_loop()
        if self._next_deadline is None:
            self._next_deadline = loop.time() + self.period_seconds

        delay = self._next_deadline - loop.time()
        if delay > 0:
            await asyncio.sleep(delay)

        self._advance(loop.time())

    def _advance(self, now: float) -> None:
        assert self._next_deadline is not None
        fired = self._next_deadline
        missed = int((now - fired) // self.period_seconds)
        if missed > 0:
            logger.debug(f"Absorbed {missed} missed tick(s)")
        self._next_deadline = fired + (missed + 1) * self.period_seconds
