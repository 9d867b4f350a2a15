"""Main entry point for the rail departures application."""

import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

import aiohttp
from pydantic import ValidationError

from rail_departures.adapters.config import ApiCredentials, AppConfig
from rail_departures.adapters.ldbws import RemoteBoardClient
from rail_departures.adapters.terminal import (
    TerminalBoardPresenter,
    TerminalRawMode,
    watch_for_cancellation,
)
from rail_departures.application.services import RefreshScheduler
from rail_departures.cli import REFRESH_INTERVAL_SECONDS, BoardRequest, parse_args
from rail_departures.domain.errors import ConfigError, TerminalError
from rail_departures.domain.models import BoardKind

logger = logging.getLogger(__name__)


def stderr_handler(stream: TextIO | None = None) -> logging.StreamHandler:
    """Log handler for stderr that stays readable while the terminal is in raw mode.

    Raw mode turns off output processing, so a bare newline no longer returns
    the cursor to the first column.
    """
    stream = stream if stream is not None else sys.stderr
    handler = logging.StreamHandler(stream)
    try:
        interactive = stream.isatty()
    except (AttributeError, ValueError):
        interactive = False
    if interactive:
        handler.terminator = "\r\n"
    return handler


def configure_logging(level: str) -> None:
    """Configure root logging to stderr."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[stderr_handler()],
    )


def load_credentials(config: AppConfig, kind: BoardKind) -> ApiCredentials:
    """Build credentials and validate them before the board starts.

    With fail-fast configuration every key must be present; otherwise only
    the key for the requested board is checked.
    """
    credentials = ApiCredentials.from_config(config)
    if config.fail_fast_config:
        credentials.validate_all()
    else:
        credentials.get_api_key(kind)
    return credentials


async def run_board(request: BoardRequest, config: AppConfig) -> None:
    """Show the requested board until the user presses a key or a signal arrives."""
    credentials = load_credentials(config, request.kind)

    # One pooled session for the whole process
    timeout = aiohttp.ClientTimeout(total=config.request_timeout_seconds)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        client = RemoteBoardClient(
            session,
            credentials,
            endpoints={
                BoardKind.DEPARTURES: config.departures_url,
                BoardKind.ARRIVALS: config.arrivals_url,
            },
            default_num_rows=config.default_num_rows,
        )
        scheduler = RefreshScheduler(client, sort_by_expected=request.sort_by_expected)

        raw_mode = TerminalRawMode()
        presenter = TerminalBoardPresenter(REFRESH_INTERVAL_SECONDS, raw_mode=raw_mode)
        cancel_signal = asyncio.Event()

        logger.info(f"Watching {request.kind.title.lower()} for {request.station_code.upper()}")
        await scheduler.run(
            request.kind,
            request.station_code,
            request.num_rows,
            REFRESH_INTERVAL_SECONDS,
            presenter,
            cancel_signal,
            resources=(raw_mode, watch_for_cancellation(cancel_signal)),
        )

    print("\nExiting...")


async def main(argv: Sequence[str] | None = None) -> int:
    """Main application entry point. Returns the process exit status."""
    request = parse_args(argv)

    try:
        config = AppConfig()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    configure_logging(config.log_level)

    try:
        await run_board(request, config)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except TerminalError as e:
        print(f"Terminal error: {e}", file=sys.stderr)
        return 1

    return 0


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
