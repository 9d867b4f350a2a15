"""Service record domain model."""

from dataclasses import dataclass

from rail_departures.domain.models.board_kind import BoardKind
from rail_departures.domain.models.station import Station


@dataclass(frozen=True)
class ServiceRecord:
    """A single train movement on a board with both endpoints resolved.

    Arrival (sta/eta) and departure (std/etd) times are kept exactly as the
    remote source sent them; the estimates are frequently a status such as
    "On time" or "Cancelled" rather than a clock time.
    """

    origin: Station
    destination: Station
    operator: str
    scheduled_arrival: str | None = None
    estimated_arrival: str | None = None
    scheduled_departure: str | None = None
    estimated_departure: str | None = None
    platform: str | None = None

    def scheduled_time(self, kind: BoardKind) -> str | None:
        """Scheduled time relevant to the board kind."""
        if kind is BoardKind.DEPARTURES:
            return self.scheduled_departure
        return self.scheduled_arrival

    def estimated_time(self, kind: BoardKind) -> str | None:
        """Estimated time or status relevant to the board kind."""
        if kind is BoardKind.DEPARTURES:
            return self.estimated_departure
        return self.estimated_arrival

    def calling_point(self, kind: BoardKind) -> Station:
        """The far end of the journey as seen from the board's station."""
        if kind is BoardKind.DEPARTURES:
            return self.destination
        return self.origin
