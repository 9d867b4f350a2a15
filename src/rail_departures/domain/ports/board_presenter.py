"""Board presenter port."""

from abc import ABC, abstractmethod

from rail_departures.domain.models.board import Board
from rail_departures.domain.models.board_kind import BoardKind


class BoardPresenter(ABC):
    """Port for showing boards and refresh problems to the operator."""

    @abstractmethod
    def render(self, board: Board, kind: BoardKind, station_code: str) -> None:
        """Replace whatever is on screen with the given board."""
        ...

    @abstractmethod
    def report_error(self, message: str) -> None:
        """Show an error notice without clearing the last board."""
        ...
