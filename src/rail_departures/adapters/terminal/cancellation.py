"""Cancellation sources: a keypress on the terminal or a termination signal."""

import asyncio
import logging
import os
import signal
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TextIO

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _on_keypress(fd: int, cancel_signal: asyncio.Event) -> None:
    try:
        data = os.read(fd, 64)
    except OSError as e:
        logger.warning(f"Reading keypress failed: {e}")
        data = b""
    logger.debug(f"Key input {data!r}, cancelling")
    cancel_signal.set()


def _on_signal(sig: signal.Signals, cancel_signal: asyncio.Event) -> None:
    logger.debug(f"Received {sig.name}, cancelling")
    cancel_signal.set()


@contextmanager
def watch_for_cancellation(
    cancel_signal: asyncio.Event,
    stream: TextIO | None = None,
    signals: Sequence[signal.Signals] = DEFAULT_SIGNALS,
) -> Iterator[None]:
    """Set ``cancel_signal`` on the first keypress or termination signal.

    Must be entered from inside a running event loop. Handlers are removed on
    exit. Keypresses are only watched when the stream is a terminal.
    """
    loop = asyncio.get_running_loop()
    stream = stream if stream is not None else sys.stdin

    installed: list[signal.Signals] = []
    for sig in signals:
        try:
            loop.add_signal_handler(sig, _on_signal, sig, cancel_signal)
            installed.append(sig)
        except (NotImplementedError, RuntimeError, ValueError) as e:
            logger.debug(f"Cannot watch {sig.name}: {e}")

    reader_fd: int | None = None
    try:
        if stream.isatty():
            reader_fd = stream.fileno()
            loop.add_reader(reader_fd, _on_keypress, reader_fd, cancel_signal)
    except (AttributeError, ValueError, OSError) as e:
        logger.debug(f"Cannot watch keypresses: {e}")
        reader_fd = None

    try:
        yield
    finally:
        if reader_fd is not None:
            loop.remove_reader(reader_fd)
        for sig in installed:
            loop.remove_signal_handler(sig)
