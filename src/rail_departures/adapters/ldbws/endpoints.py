"""Static mapping from board kind to endpoint and credential key."""

from rail_departures.adapters.ldbws.constants import (
    ARR_API_KEY_VAR,
    ARR_BASE_URL,
    DEP_API_KEY_VAR,
    DEP_BASE_URL,
)
from rail_departures.domain.models import BoardKind

ENDPOINTS: dict[BoardKind, str] = {
    BoardKind.DEPARTURES: DEP_BASE_URL,
    BoardKind.ARRIVALS: ARR_BASE_URL,
}

CREDENTIAL_KEYS: dict[BoardKind, str] = {
    BoardKind.DEPARTURES: DEP_API_KEY_VAR,
    BoardKind.ARRIVALS: ARR_API_KEY_VAR,
}


def endpoint_for(kind: BoardKind) -> str:
    """Base URL of the board endpoint for a kind."""
    return ENDPOINTS[kind]


def credential_key_for(kind: BoardKind) -> str:
    """Name of the environment variable holding the kind's API key."""
    return CREDENTIAL_KEYS[kind]
