"""Command-line arguments for the live board."""

import argparse
from collections.abc import Sequence
from dataclasses import dataclass

from rail_departures import __version__
from rail_departures.domain.models import BoardKind

# Seconds between automatic refreshes.
REFRESH_INTERVAL_SECONDS = 15

_COMMAND_KINDS = {
    "departures": BoardKind.DEPARTURES,
    "d": BoardKind.DEPARTURES,
    "dep": BoardKind.DEPARTURES,
    "arrivals": BoardKind.ARRIVALS,
    "a": BoardKind.ARRIVALS,
    "arr": BoardKind.ARRIVALS,
}


@dataclass(frozen=True)
class BoardRequest:
    """What the user asked to watch."""

    kind: BoardKind
    station_code: str
    num_rows: int | None = None
    sort_by_expected: bool = False


def _num_rows(value: str) -> int:
    """argparse type for the row limit (1-255)."""
    try:
        rows = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid number of rows: '{value}'") from e
    if not 1 <= rows <= 255:
        raise argparse.ArgumentTypeError("number of rows must be between 1 and 255")
    return rows


def _add_board_options(parser: argparse.ArgumentParser, default: object) -> None:
    parser.add_argument(
        "-n",
        "--num-rows",
        type=_num_rows,
        default=default,
        help="Number of rows (services) to display.",
    )
    parser.add_argument(
        "--sort-by-expected",
        action="store_true",
        default=default if default is argparse.SUPPRESS else False,
        help="Sort services by expected time instead of the order the service returns.",
    )


def _setup_argparse() -> argparse.ArgumentParser:
    """Set up and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="rail-departures",
        description="A CLI for fetching train departure and arrival boards.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Departures from London Bridge
  rail-departures departures LBG

  # Five arrivals at Brighton
  rail-departures arrivals BTN -n 5

The board refreshes every {REFRESH_INTERVAL_SECONDS}s. Press any key to exit.
Requires DEP_API_KEY / ARR_API_KEY in the environment or a .env file.
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_board_options(parser, default=None)

    subparsers = parser.add_subparsers(dest="command", help="Board to show")

    departures_parser = subparsers.add_parser(
        "departures",
        aliases=["d", "dep"],
        help="Fetch and display the departure board for a station",
    )
    departures_parser.add_argument(
        "station_code", help="The station code (CRS) to get departures for."
    )
    _add_board_options(departures_parser, default=argparse.SUPPRESS)

    arrivals_parser = subparsers.add_parser(
        "arrivals",
        aliases=["a", "arr"],
        help="Fetch and display the arrival board for a station",
    )
    arrivals_parser.add_argument(
        "station_code", help="The station code (CRS) to get arrivals for."
    )
    _add_board_options(arrivals_parser, default=argparse.SUPPRESS)

    return parser


def parse_args(argv: Sequence[str] | None = None) -> BoardRequest:
    """Parse command-line arguments into a board request.

    Exits with usage help when no board command is given.
    """
    parser = _setup_argparse()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        parser.exit(2)

    return BoardRequest(
        kind=_COMMAND_KINDS[args.command],
        station_code=args.station_code,
        num_rows=args.num_rows,
        sort_by_expected=args.sort_by_expected,
    )
