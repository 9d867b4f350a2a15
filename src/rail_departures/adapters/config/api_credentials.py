"""API key lookup per board kind, validated once per process."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rail_departures.adapters.ldbws.endpoints import credential_key_for
from rail_departures.domain.errors import EmptyVarError, MissingVarError
from rail_departures.domain.models import BoardKind
from rail_departures.domain.ports.credential_source import CredentialSource

if TYPE_CHECKING:
    from rail_departures.adapters.config.app_config import AppConfig

logger = logging.getLogger(__name__)


class ApiCredentials(CredentialSource):
    """Credential source built once at startup and passed by reference.

    Raw values are taken from the configuration object; each key is validated
    the first time it is requested and the validated value is kept for the
    lifetime of this object.
    """

    def __init__(self, values: dict[str, str | None]) -> None:
        """Initialize with raw values keyed by environment variable name."""
        self._values = dict(values)
        self._validated: dict[BoardKind, str] = {}

    @classmethod
    def from_config(cls, config: AppConfig) -> ApiCredentials:
        """Build credentials from application configuration."""
        return cls(
            {
                credential_key_for(BoardKind.DEPARTURES): config.dep_api_key,
                credential_key_for(BoardKind.ARRIVALS): config.arr_api_key,
            }
        )

    def get_api_key(self, kind: BoardKind) -> str:
        """Return the validated API key for a board kind.

        Raises:
            MissingVarError: The variable is not set.
            EmptyVarError: The variable is blank.
        """
        if kind in self._validated:
            return self._validated[kind]

        var = credential_key_for(kind)
        value = self._values.get(var)
        if value is None:
            raise MissingVarError(var)
        if not value.strip():
            raise EmptyVarError(var)

        logger.debug(f"Loaded {var}")
        self._validated[kind] = value
        return value

    def validate_all(self) -> None:
        """Validate every board kind's key, failing on the first problem."""
        for kind in BoardKind:
            self.get_api_key(kind)
