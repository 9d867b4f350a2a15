"""Tests for RefreshScheduler behavior."""

import asyncio
import logging
import os
from types import TracebackType
from unittest.mock import AsyncMock, MagicMock

import pytest

from rail_departures.adapters.terminal import TerminalRawMode
from rail_departures.application.services import (
    RefreshScheduler,
    SchedulerState,
    describe_fetch_error,
)
from rail_departures.domain.errors import DecodeError, NetworkError
from rail_departures.domain.models import Board, BoardKind, RawBoardResponse
from rail_departures.domain.ports import BoardPresenter

LBG_RESPONSE = RawBoardResponse.model_validate(
    {
        "locationName": "London Bridge",
        "crs": "LBG",
        "trainServices": [
            {
                "origin": [{"locationName": "Brighton", "crs": "BTN"}],
                "destination": [{"locationName": "Bedford", "crs": "BDM"}],
                "std": "10:00",
                "etd": "On time",
                "operator": "Thameslink",
            }
        ],
    }
)


class FakeTicker:
    """Ticks immediately a fixed number of times, then requests cancellation and blocks."""

    def __init__(self, ticks: int, cancel_signal: asyncio.Event | None = None) -> None:
        self.remaining = ticks
        self.cancel_signal = cancel_signal
        self.calls = 0

    async def tick(self) -> None:
        self.calls += 1
        if self.remaining > 0:
            self.remaining -= 1
            await asyncio.sleep(0)
            return
        if self.cancel_signal is not None:
            self.cancel_signal.set()
        await asyncio.Event().wait()


class TrackedResource:
    """Context manager that counts how often it is entered and exited."""

    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0
        self.exit_exc_type: type[BaseException] | None = None

    def __enter__(self) -> "TrackedResource":
        self.entered += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.exited += 1
        self.exit_exc_type = exc_type


def _repository(*results: object) -> MagicMock:
    repository = MagicMock()
    if results:
        repository.fetch = AsyncMock(side_effect=list(results))
    else:
        repository.fetch = AsyncMock(return_value=LBG_RESPONSE)
    return repository


def _presenter() -> MagicMock:
    return MagicMock(spec=BoardPresenter)


@pytest.mark.asyncio
async def test_runs_one_cycle_per_tick_plus_initial() -> None:
    """Given three ticks before cancellation, when running, then four fetches and renders happen."""
    cancel_signal = asyncio.Event()
    ticker = FakeTicker(3, cancel_signal)
    repository = _repository()
    presenter = _presenter()
    resource = TrackedResource()
    scheduler = RefreshScheduler(repository, ticker_factory=lambda _: ticker)

    await scheduler.run(
        BoardKind.DEPARTURES, "lbg", 5, 15, presenter, cancel_signal, resources=(resource,)
    )

    assert repository.fetch.await_count == 4
    repository.fetch.assert_awaited_with(BoardKind.DEPARTURES, "lbg", 5)
    assert presenter.render.call_count == 4
    board = presenter.render.call_args.args[0]
    assert isinstance(board, Board)
    assert board.station_code == "LBG"
    assert presenter.render.call_args.args[1:] == (BoardKind.DEPARTURES, "lbg")
    assert scheduler.state is SchedulerState.CANCELLED
    assert (resource.entered, resource.exited) == (1, 1)


@pytest.mark.asyncio
async def test_cancel_before_first_tick_runs_only_initial_cycle() -> None:
    """Given cancellation already requested, when running, then only the initial cycle runs."""
    cancel_signal = asyncio.Event()
    cancel_signal.set()
    repository = _repository()
    presenter = _presenter()
    resource = TrackedResource()
    scheduler = RefreshScheduler(repository)

    await scheduler.run(
        BoardKind.ARRIVALS, "BTN", None, 15, presenter, cancel_signal, resources=(resource,)
    )

    assert repository.fetch.await_count == 1
    assert presenter.render.call_count == 1
    assert (resource.entered, resource.exited) == (1, 1)
    assert resource.exit_exc_type is None


@pytest.mark.asyncio
async def test_fetch_errors_are_reported_and_loop_continues() -> None:
    """Given a failing, a good and a malformed fetch, when running, then errors are reported and the loop keeps going."""
    cancel_signal = asyncio.Event()
    repository = _repository(
        NetworkError("API returned status 503", status_code=503),
        LBG_RESPONSE,
        DecodeError("Unexpected board response"),
    )
    presenter = _presenter()
    scheduler = RefreshScheduler(repository, ticker_factory=lambda _: FakeTicker(2, cancel_signal))

    await scheduler.run(BoardKind.DEPARTURES, "LBG", None, 15, presenter, cancel_signal)

    assert repository.fetch.await_count == 3
    assert presenter.render.call_count == 1
    assert [c.args[0] for c in presenter.report_error.call_args_list] == [
        "Error refreshing services (Service unavailable): API returned status 503",
        "Error refreshing services: Unexpected board response",
    ]


@pytest.mark.asyncio
async def test_failed_initial_fetch_is_not_fatal() -> None:
    """Given the first fetch fails, when running, then the next tick still refreshes."""
    cancel_signal = asyncio.Event()
    repository = _repository(NetworkError("Request failed"), LBG_RESPONSE)
    presenter = _presenter()
    scheduler = RefreshScheduler(repository, ticker_factory=lambda _: FakeTicker(1, cancel_signal))

    await scheduler.run(BoardKind.DEPARTURES, "LBG", None, 15, presenter, cancel_signal)

    presenter.report_error.assert_called_once_with(
        "Error refreshing services (Connection error): Request failed"
    )
    presenter.render.assert_called_once()


@pytest.mark.asyncio
async def test_render_errors_are_reported() -> None:
    """Given rendering raises, when running, then a display error is reported and the loop continues."""
    cancel_signal = asyncio.Event()
    repository = _repository()
    presenter = _presenter()
    presenter.render.side_effect = RuntimeError("boom")
    scheduler = RefreshScheduler(repository, ticker_factory=lambda _: FakeTicker(1, cancel_signal))

    await scheduler.run(BoardKind.DEPARTURES, "LBG", None, 15, presenter, cancel_signal)

    assert repository.fetch.await_count == 2
    presenter.report_error.assert_called_with("Display error: boom")


@pytest.mark.asyncio
async def test_cancellation_during_fetch_lets_cycle_finish() -> None:
    """Given cancellation is requested while a fetch is in flight, when running, then that cycle still renders and no more follow."""
    cancel_signal = asyncio.Event()

    async def fetch(*_args: object) -> RawBoardResponse:
        cancel_signal.set()
        await asyncio.sleep(0)
        return LBG_RESPONSE

    repository = MagicMock()
    repository.fetch = AsyncMock(side_effect=fetch)
    presenter = _presenter()
    scheduler = RefreshScheduler(repository, ticker_factory=lambda _: FakeTicker(5))

    await scheduler.run(BoardKind.DEPARTURES, "LBG", None, 15, presenter, cancel_signal)

    assert repository.fetch.await_count == 1
    presenter.render.assert_called_once()


@pytest.mark.asyncio
async def test_fetches_never_overlap() -> None:
    """Given slow fetches and immediate ticks, when running, then at most one fetch is in flight."""
    cancel_signal = asyncio.Event()
    in_flight = 0
    max_in_flight = 0

    async def fetch(*_args: object) -> RawBoardResponse:
        nonlocal in_flight, max_in_flight
        in_flight += 1
        max_in_flight = max(max_in_flight, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return LBG_RESPONSE

    repository = MagicMock()
    repository.fetch = AsyncMock(side_effect=fetch)
    scheduler = RefreshScheduler(repository, ticker_factory=lambda _: FakeTicker(4, cancel_signal))

    await scheduler.run(BoardKind.DEPARTURES, "LBG", None, 15, _presenter(), cancel_signal)

    assert repository.fetch.await_count == 5
    assert max_in_flight == 1


@pytest.mark.asyncio
async def test_resources_released_once_when_error_propagates() -> None:
    """Given an unexpected error from the repository, when running, then it propagates and resources are released once."""
    cancel_signal = asyncio.Event()
    repository = _repository(ValueError("unexpected"))
    resource = TrackedResource()
    scheduler = RefreshScheduler(repository, ticker_factory=lambda _: FakeTicker(0))

    with pytest.raises(ValueError, match="unexpected"):
        await scheduler.run(
            BoardKind.DEPARTURES, "LBG", None, 15, _presenter(), cancel_signal, resources=(resource,)
        )

    assert (resource.entered, resource.exited) == (1, 1)
    assert resource.exit_exc_type is ValueError


@pytest.mark.asyncio
async def test_resources_released_once_when_task_cancelled() -> None:
    """Given the running task is cancelled while waiting, when it unwinds, then resources are released once."""
    cancel_signal = asyncio.Event()
    fetched = asyncio.Event()

    async def fetch(*_args: object) -> RawBoardResponse:
        fetched.set()
        return LBG_RESPONSE

    repository = MagicMock()
    repository.fetch = AsyncMock(side_effect=fetch)
    resource = TrackedResource()
    scheduler = RefreshScheduler(repository, ticker_factory=lambda _: FakeTicker(0))

    task = asyncio.create_task(
        scheduler.run(
            BoardKind.DEPARTURES, "LBG", None, 15, _presenter(), cancel_signal, resources=(resource,)
        )
    )
    await fetched.wait()
    await asyncio.sleep(0.01)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert (resource.entered, resource.exited) == (1, 1)
    assert scheduler.state is SchedulerState.WAITING


@pytest.mark.asyncio
async def test_reporting_failure_does_not_stop_loop() -> None:
    """Given the presenter cannot report errors, when fetches fail, then the loop still finishes normally."""
    cancel_signal = asyncio.Event()
    repository = _repository(NetworkError("down"), NetworkError("down"))
    presenter = _presenter()
    presenter.report_error.side_effect = OSError("stderr closed")
    scheduler = RefreshScheduler(repository, ticker_factory=lambda _: FakeTicker(1, cancel_signal))

    await scheduler.run(BoardKind.DEPARTURES, "LBG", None, 15, presenter, cancel_signal)

    assert repository.fetch.await_count == 2
    assert scheduler.state is SchedulerState.CANCELLED


def test_describe_fetch_error_uses_status_reason() -> None:
    """Given a rate-limited response, when describing it, then the reason is included."""
    message = describe_fetch_error(NetworkError("API returned status 429", status_code=429))

    assert message == "Error refreshing services (Rate limit exceeded): API returned status 429"


def test_describe_decode_error_has_no_reason() -> None:
    """Given a decode error, when describing it, then only the message is shown."""
    assert describe_fetch_error(DecodeError("bad body")) == "Error refreshing services: bad body"


def _read_available(fd: int) -> bytes:
    os.set_blocking(fd, False)
    chunks = []
    while True:
        try:
            chunk = os.read(fd, 4096)
        except (BlockingIOError, OSError):
            break
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


@pytest.mark.asyncio
async def test_handled_fetch_failures_leave_raw_terminal_to_presenter() -> None:
    """Given a raw-mode terminal with warnings logged to it, when fetches fail, then only the presenter reports them."""
    master_fd, slave_fd = os.openpty()
    terminal = os.fdopen(slave_fd, "w", closefd=False)
    handler = logging.StreamHandler(terminal)
    handler.setLevel(logging.WARNING)
    root = logging.getLogger()
    root.addHandler(handler)
    try:
        cancel_signal = asyncio.Event()
        repository = _repository(NetworkError("down"), NetworkError("down"))
        presenter = _presenter()
        scheduler = RefreshScheduler(
            repository, ticker_factory=lambda _: FakeTicker(1, cancel_signal)
        )

        await scheduler.run(
            BoardKind.DEPARTURES,
            "LBG",
            None,
            15,
            presenter,
            cancel_signal,
            resources=(TerminalRawMode(terminal),),
        )
        handler.flush()
        output = _read_available(master_fd)
    finally:
        root.removeHandler(handler)
        terminal.close()
        os.close(slave_fd)
        os.close(master_fd)

    assert b"failed" not in output
    assert presenter.report_error.call_count == 2
