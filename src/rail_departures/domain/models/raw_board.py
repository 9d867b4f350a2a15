"""Wire models for the Live Departure/Arrival Board JSON envelope.

The remote service returns camelCase field names and many more fields than the
board needs; unknown fields are ignored. ``origin`` and ``destination`` are
legacy zero-or-one element lists.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class RawStation(BaseModel):
    """A location as it appears inside a service's origin/destination list."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    location_name: str = Field(alias="locationName")
    crs: str
    via: str | None = None


class RawServiceRecord(BaseModel):
    """A single entry of ``trainServices`` before normalization."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    destination: list[RawStation] = Field(default_factory=list)
    origin: list[RawStation] = Field(default_factory=list)
    sta: str | None = None
    eta: str | None = None
    std: str | None = None
    etd: str | None = None
    operator: str = Field(validation_alias=AliasChoices("operator", "operatorCode"))
    platform: str | None = None

    @field_validator("destination", "origin", mode="before")
    @classmethod
    def null_list_is_empty(cls, v: Any) -> Any:
        """Treat an explicit null location list like an empty one."""
        return [] if v is None else v


class RawBoardResponse(BaseModel):
    """Top-level board envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    location_name: str = Field(alias="locationName")
    crs: str
    train_services: list[RawServiceRecord] = Field(default_factory=list, alias="trainServices")

    @field_validator("train_services", mode="before")
    @classmethod
    def null_services_are_empty(cls, v: Any) -> Any:
        """The service sends null instead of an empty list when nothing is running."""
        return [] if v is None else v
