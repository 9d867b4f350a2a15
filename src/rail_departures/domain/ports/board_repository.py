"""Board repository port."""

from typing import Protocol

from rail_departures.domain.models.board_kind import BoardKind
from rail_departures.domain.models.raw_board import RawBoardResponse


class BoardRepository(Protocol):
    """Port for retrieving a raw station board from the remote service."""

    async def fetch(
        self,
        kind: BoardKind,
        station_code: str,
        row_limit: int | None = None,
    ) -> RawBoardResponse:
        """Fetch one board. Raises NetworkError or DecodeError."""
        ...
