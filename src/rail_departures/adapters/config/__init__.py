"""Configuration adapters."""

from rail_departures.adapters.config.api_credentials import ApiCredentials
from rail_departures.adapters.config.app_config import AppConfig

__all__ = ["ApiCredentials", "AppConfig"]
