"""Terminal adapters: raw mode, cancellation sources and board rendering."""

from rail_departures.adapters.terminal.board_presenter import TerminalBoardPresenter
from rail_departures.adapters.terminal.cancellation import watch_for_cancellation
from rail_departures.adapters.terminal.raw_mode import TerminalRawMode

__all__ = ["TerminalBoardPresenter", "TerminalRawMode", "watch_for_cancellation"]
