"""Adapters layer - external system integrations."""

from rail_departures.adapters.config import ApiCredentials, AppConfig
from rail_departures.adapters.ldbws import RemoteBoardClient

__all__ = [
    "ApiCredentials",
    "AppConfig",
    "RemoteBoardClient",
]
