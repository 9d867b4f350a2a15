"""Station domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    """Represents a calling point at either end of a service."""

    location_name: str
    crs: str  # 3-character CRS code (e.g., "LBG")
    via: str | None = None  # Routing hint such as "via Redhill"
