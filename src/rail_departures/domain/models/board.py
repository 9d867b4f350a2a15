"""Board domain model."""

from dataclasses import dataclass

from rail_departures.domain.models.service_record import ServiceRecord


@dataclass(frozen=True)
class Board:
    """Services for one station at one point in time, in remote order."""

    station_name: str
    station_code: str
    services: tuple[ServiceRecord, ...] = ()
