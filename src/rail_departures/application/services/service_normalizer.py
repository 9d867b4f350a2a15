"""Normalization of raw remote service records into the board domain model."""

import logging
import re

from rail_departures.domain.errors import (
    ConversionError,
    MissingDestinationError,
    MissingOriginError,
)
from rail_departures.domain.models import (
    Board,
    BoardKind,
    RawBoardResponse,
    RawServiceRecord,
    RawStation,
    ServiceRecord,
    Station,
)

logger = logging.getLogger(__name__)

_CLOCK_TIME = re.compile(r"^(\d{1,2}):(\d{2})$")


def _to_station(raw: RawStation) -> Station:
    return Station(location_name=raw.location_name, crs=raw.crs, via=raw.via)


def normalize(raw: RawServiceRecord) -> ServiceRecord:
    """Convert one raw service record into a ServiceRecord.

    Takes the first element of the legacy origin/destination lists. All other
    fields are passed through untouched, including absence.

    Raises:
        MissingDestinationError: The destination list is empty.
        MissingOriginError: The origin list is empty.
    """
    if not raw.destination:
        raise MissingDestinationError()
    if not raw.origin:
        raise MissingOriginError()

    return ServiceRecord(
        origin=_to_station(raw.origin[0]),
        destination=_to_station(raw.destination[0]),
        operator=raw.operator,
        scheduled_arrival=raw.sta,
        estimated_arrival=raw.eta,
        scheduled_departure=raw.std,
        estimated_departure=raw.etd,
        platform=raw.platform,
    )


def _clock_minutes(value: str | None) -> int | None:
    """Minutes since midnight for an "HH:MM" string, None for statuses."""
    if not value:
        return None
    match = _CLOCK_TIME.match(value.strip())
    if not match:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def expected_minutes(service: ServiceRecord, kind: BoardKind) -> int | None:
    """Effective expected time of a service in minutes since midnight.

    Uses the estimate when it is a clock time and falls back to the scheduled
    time when the estimate is a status such as "On time" or "Delayed".
    """
    estimated = _clock_minutes(service.estimated_time(kind))
    if estimated is not None:
        return estimated
    return _clock_minutes(service.scheduled_time(kind))


def _sort_by_expected(services: list[ServiceRecord], kind: BoardKind) -> list[ServiceRecord]:
    def sort_key(service: ServiceRecord) -> tuple[int, int]:
        minutes = expected_minutes(service, kind)
        if minutes is None:
            return (1, 0)
        return (0, minutes)

    return sorted(services, key=sort_key)


def build_board(
    response: RawBoardResponse,
    kind: BoardKind = BoardKind.DEPARTURES,
    sort_by_expected: bool = False,
) -> Board:
    """Build a Board from a decoded response, dropping records that fail conversion.

    Each record is normalized independently; a malformed record is left off
    the board and never fails the whole fetch. Remote order is preserved
    unless ``sort_by_expected`` is set.
    """
    services: list[ServiceRecord] = []
    for index, raw in enumerate(response.train_services):
        try:
            services.append(normalize(raw))
        except ConversionError as e:
            logger.debug(f"Dropping service {index} at {response.crs}: {e}")

    dropped = len(response.train_services) - len(services)
    if dropped:
        logger.info(f"Dropped {dropped} incomplete service(s) from {response.crs} board")

    if sort_by_expected:
        services = _sort_by_expected(services, kind)

    return Board(
        station_name=response.location_name,
        station_code=response.crs,
        services=tuple(services),
    )
