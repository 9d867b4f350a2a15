"""Refresh loop that keeps a station board on screen until cancelled."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager, ExitStack
from enum import Enum
from typing import TYPE_CHECKING, Any

from rail_departures.application.services.interval_ticker import IntervalTicker
from rail_departures.application.services.service_normalizer import build_board
from rail_departures.domain.errors import FetchError, NetworkError
from rail_departures.domain.models import BoardKind, ErrorDetails

if TYPE_CHECKING:
    from rail_departures.domain.contracts import TickerProtocol
    from rail_departures.domain.ports import BoardPresenter, BoardRepository

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    """Lifecycle of a running board."""

    IDLE = "idle"
    FETCHING = "fetching"
    RENDERING = "rendering"
    WAITING = "waiting"
    CANCELLED = "cancelled"


def describe_fetch_error(error: FetchError) -> str:
    """Operator-facing notice for a failed refresh."""
    if isinstance(error, NetworkError):
        details = ErrorDetails.from_status(error.status_code)
        return f"Error refreshing services ({details.reason}): {error}"
    return f"Error refreshing services: {error}"


class RefreshScheduler:
    """Fetches, normalizes and renders a board on a fixed cadence.

    A single flow of control: one cycle runs immediately, then each loop
    iteration waits for whichever comes first of the next timer tick or the
    cancellation signal. A refresh only starts after the previous render has
    finished, so fetches never overlap. Cancellation is observed only between
    cycles; a fetch already in flight is allowed to finish.
    """

    def __init__(
        self,
        repository: BoardRepository,
        ticker_factory: Callable[[float], TickerProtocol] = IntervalTicker,
        sort_by_expected: bool = False,
    ) -> None:
        """Initialize the scheduler.

        Args:
            repository: Source of raw boards, shared for every cycle.
            ticker_factory: Builds the periodic timer from the interval.
            sort_by_expected: Sort services by expected time instead of
                keeping remote order.
        """
        self._repository = repository
        self._ticker_factory = ticker_factory
        self._sort_by_expected = sort_by_expected
        self.state = SchedulerState.IDLE

    async def run(
        self,
        kind: BoardKind,
        station_code: str,
        row_limit: int | None,
        interval_seconds: float,
        presenter: BoardPresenter,
        cancel_signal: asyncio.Event,
        resources: Sequence[AbstractContextManager[Any]] = (),
    ) -> None:
        """Run until ``cancel_signal`` is set.

        ``resources`` are entered before the first cycle and released exactly
        once on every exit path: cancellation, a propagating error, or the
        surrounding task being cancelled.
        """
        ticker = self._ticker_factory(interval_seconds)

        with ExitStack() as stack:
            for resource in resources:
                stack.enter_context(resource)

            await self._refresh_once(kind, station_code, row_limit, presenter)
            await self._wait_loop(ticker, kind, station_code, row_limit, presenter, cancel_signal)

        logger.info(f"Stopped refreshing {kind.title.lower()} for {station_code.upper()}")

    async def _wait_loop(
        self,
        ticker: TickerProtocol,
        kind: BoardKind,
        station_code: str,
        row_limit: int | None,
        presenter: BoardPresenter,
        cancel_signal: asyncio.Event,
    ) -> None:
        cancel_waiter: asyncio.Future[Any] = asyncio.ensure_future(cancel_signal.wait())
        tick_waiter: asyncio.Future[Any] | None = None

        try:
            while True:
                self._set_state(SchedulerState.WAITING)
                if tick_waiter is None:
                    tick_waiter = asyncio.ensure_future(ticker.tick())

                await asyncio.wait(
                    {tick_waiter, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED
                )

                if cancel_waiter.done():
                    self._set_state(SchedulerState.CANCELLED)
                    return

                tick_waiter.result()
                tick_waiter = None
                await self._refresh_once(kind, station_code, row_limit, presenter)
        finally:
            pending = [w for w in (tick_waiter, cancel_waiter) if w is not None and not w.done()]
            for waiter in pending:
                waiter.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

    async def _refresh_once(
        self,
        kind: BoardKind,
        station_code: str,
        row_limit: int | None,
        presenter: BoardPresenter,
    ) -> None:
        """Fetch, normalize and render one board. Fetch failures are reported, not raised."""
        self._set_state(SchedulerState.FETCHING)
        try:
            response = await self._repository.fetch(kind, station_code, row_limit)
        except FetchError as e:
            logger.debug(f"Refresh of {station_code.upper()} failed: {e}")
            self._report(presenter, describe_fetch_error(e))
            return

        board = build_board(response, kind, sort_by_expected=self._sort_by_expected)

        self._set_state(SchedulerState.RENDERING)
        try:
            presenter.render(board, kind, station_code)
        except Exception as e:
            logger.debug("Rendering board failed", exc_info=True)
            self._report(presenter, f"Display error: {e}")

    @staticmethod
    def _report(presenter: BoardPresenter, message: str) -> None:
        try:
            presenter.report_error(message)
        except Exception:
            logger.exception(f"Could not report error to presenter: {message}")

    def _set_state(self, state: SchedulerState) -> None:
        logger.debug(f"Scheduler {self.state.value} -> {state.value}")
        self.state = state
