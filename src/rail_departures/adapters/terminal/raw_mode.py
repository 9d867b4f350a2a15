"""Scoped terminal raw mode so a single keypress can stop the board."""

from __future__ import annotations

import logging
import sys
import termios
import tty
from collections.abc import Iterator
from contextlib import contextmanager
from types import TracebackType
from typing import Any, TextIO

from rail_departures.domain.errors import TerminalError

logger = logging.getLogger(__name__)


class TerminalRawMode:
    """Puts an interactive stdin into raw mode for the duration of a ``with`` block.

    The original terminal attributes are restored exactly once when the block
    exits, whichever way it exits. When the stream is not a TTY (piped input,
    tests, CI) the guard does nothing.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the guard.

        Args:
            stream: Input stream to switch, defaults to sys.stdin.
        """
        self._stream = stream if stream is not None else sys.stdin
        self._fd: int | None = None
        self._saved: list[Any] | None = None

    @property
    def interactive(self) -> bool:
        """Whether the stream is a terminal."""
        try:
            return self._stream.isatty()
        except (AttributeError, ValueError):
            return False

    @property
    def active(self) -> bool:
        """Whether raw mode is currently borrowed."""
        return self._saved is not None

    def __enter__(self) -> TerminalRawMode:
        if not self.interactive:
            logger.debug("stdin is not a terminal, raw mode skipped")
            return self

        fd = self._stream.fileno()
        try:
            saved = termios.tcgetattr(fd)
            tty.setraw(fd)
        except termios.error as e:
            raise TerminalError(f"Could not enable raw mode: {e}") from e

        self._fd = fd
        self._saved = saved
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self._restore()
            return

        # Keep the original error; a failed restore is only logged here.
        try:
            self._restore()
        except TerminalError as e:
            logger.error(str(e))

    def _restore(self) -> None:
        if self._saved is None or self._fd is None:
            return
        saved, self._saved = self._saved, None
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, saved)
        except termios.error as e:
            raise TerminalError(f"Could not restore terminal mode: {e}") from e

    @contextmanager
    def paused(self) -> Iterator[None]:
        """Temporarily return to the original mode, e.g. while printing a board."""
        if self._saved is None or self._fd is None:
            yield
            return

        fd, saved = self._fd, self._saved
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        except termios.error as e:
            logger.warning(f"Could not leave raw mode for printing: {e}")
        try:
            yield
        finally:
            if self._saved is not None:
                try:
                    tty.setraw(fd)
                except termios.error as e:
                    logger.warning(f"Could not re-enable raw mode: {e}")
