"""Board kind domain model."""

from enum import Enum


class BoardKind(Enum):
    """The type of service board: trains leaving or trains arriving."""

    DEPARTURES = "departures"
    ARRIVALS = "arrivals"

    @property
    def title(self) -> str:
        """Display-friendly title for the board type."""
        return _TITLES[self]


_TITLES = {
    BoardKind.DEPARTURES: "Departures",
    BoardKind.ARRIVALS: "Arrivals",
}
