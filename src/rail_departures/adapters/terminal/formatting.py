"""Rich renderables for station boards."""

from datetime import datetime

from rich import box
from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from rail_departures.domain.models import Board, BoardKind, ServiceRecord, Station


def format_station(station: Station) -> str:
    """Format a station as "Name (CRS)" with an optional "via" line."""
    result = f"{station.location_name} ({station.crs})"
    if station.via:
        result += f"\n{station.via}"
    return result


def expected_text(expected: str) -> Text:
    """Green for "On time", red for anything else (delays, cancellations, times)."""
    style = "bold green" if expected.strip().lower() == "on time" else "bold red"
    return Text(expected, style=style)


def headers_for(kind: BoardKind) -> list[str]:
    """Column headers; the first column depends on the board kind."""
    first = "Destination" if kind is BoardKind.DEPARTURES else "Origin"
    return [first, "Platform", "Operator", "Scheduled", "Expected"]


def service_row(service: ServiceRecord, kind: BoardKind) -> list[Text]:
    """Table cells for one service."""
    return [
        Text(format_station(service.calling_point(kind))),
        Text(service.platform or "--"),
        Text(service.operator),
        Text(service.scheduled_time(kind) or ""),
        expected_text(service.estimated_time(kind) or ""),
    ]


def build_table(board: Board, kind: BoardKind) -> Table:
    """Bordered table with one row per service."""
    table = Table(box=box.ROUNDED, header_style="bold", show_lines=True)

    first, *rest = headers_for(kind)
    table.add_column(first, justify="left")
    for header in rest:
        table.add_column(header, justify="center")

    for service in board.services:
        table.add_row(*service_row(service, kind))
    return table


def format_board(
    board: Board,
    kind: BoardKind,
    station_code: str,
    updated_at: datetime,
    refresh_interval_seconds: int,
) -> RenderableType:
    """Everything shown for one refresh of the board."""
    if not board.services:
        return Text(f"No services found for station code '{station_code.upper()}'.")

    return Group(
        Text(f"{kind.title} for {board.station_name} ({board.station_code})"),
        Text(f"Last updated: {updated_at.strftime('%H:%M:%S')}"),
        Text(""),
        build_table(board, kind),
        Text(
            f"Press any key to exit. Auto-refresh every {refresh_interval_seconds}s.",
            style="bold italic",
        ),
    )
