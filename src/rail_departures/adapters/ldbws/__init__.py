"""National Rail Live Departure Board web service adapter."""

from rail_departures.adapters.ldbws.board_client import RemoteBoardClient
from rail_departures.adapters.ldbws.endpoints import credential_key_for, endpoint_for

__all__ = ["RemoteBoardClient", "credential_key_for", "endpoint_for"]
