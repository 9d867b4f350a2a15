"""Terminal presenter that redraws the board on every refresh."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from datetime import datetime
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from rail_departures.adapters.terminal.formatting import format_board
from rail_departures.domain.ports.board_presenter import BoardPresenter

if TYPE_CHECKING:
    from rail_departures.adapters.terminal.raw_mode import TerminalRawMode
    from rail_departures.domain.models import Board, BoardKind


class TerminalBoardPresenter(BoardPresenter):
    """Clears the screen and prints the latest board as a table.

    Error notices are written below the last board without clearing it, so a
    failed refresh leaves the previous board visible.
    """

    def __init__(
        self,
        refresh_interval_seconds: int,
        raw_mode: TerminalRawMode | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the presenter.

        Args:
            refresh_interval_seconds: Shown in the exit/refresh hint.
            raw_mode: Guard to pause while printing, if raw mode is in use.
            console: Console for boards, defaults to stdout.
            err_console: Console for error notices, defaults to stderr.
            clock: Source of the "Last updated" time.
        """
        self.refresh_interval_seconds = refresh_interval_seconds
        self._raw_mode = raw_mode
        self._console = console if console is not None else Console()
        self._err_console = err_console if err_console is not None else Console(stderr=True)
        self._clock = clock

    def _printing(self) -> AbstractContextManager[None]:
        return self._raw_mode.paused() if self._raw_mode else nullcontext()

    def render(self, board: Board, kind: BoardKind, station_code: str) -> None:
        """Clear the screen and print the board."""
        renderable = format_board(
            board,
            kind,
            station_code,
            updated_at=self._clock(),
            refresh_interval_seconds=self.refresh_interval_seconds,
        )
        with self._printing():
            self._console.clear()
            self._console.print(renderable)

    def report_error(self, message: str) -> None:
        """Print an error notice under the current board."""
        with self._printing():
            self._err_console.print(Text(message, style="red"))
