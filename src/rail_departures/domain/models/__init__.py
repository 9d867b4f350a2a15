"""Domain models for rail departure boards."""

from rail_departures.domain.models.board import Board
from rail_departures.domain.models.board_kind import BoardKind
from rail_departures.domain.models.error_details import ErrorDetails
from rail_departures.domain.models.raw_board import (
    RawBoardResponse,
    RawServiceRecord,
    RawStation,
)
from rail_departures.domain.models.service_record import ServiceRecord
from rail_departures.domain.models.station import Station

__all__ = [
    "Board",
    "BoardKind",
    "ErrorDetails",
    "RawBoardResponse",
    "RawServiceRecord",
    "RawStation",
    "ServiceRecord",
    "Station",
]
