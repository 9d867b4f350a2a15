"""12-factor configuration adapter using environment variables and a .env file."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rail_departures.adapters.ldbws.constants import ARR_BASE_URL, DEFAULT_NUM_ROWS, DEP_BASE_URL


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API keys, validated on first use by ApiCredentials
    dep_api_key: str | None = Field(default=None, description="API key for the departures board")
    arr_api_key: str | None = Field(default=None, description="API key for the arrivals board")

    # Remote service configuration
    departures_url: str = Field(
        default=DEP_BASE_URL, description="Base URL of the live departure board endpoint"
    )
    arrivals_url: str = Field(
        default=ARR_BASE_URL, description="Base URL of the live arrival board endpoint"
    )
    request_timeout_seconds: float = Field(
        default=10.0, description="Total timeout for a single board request in seconds"
    )
    default_num_rows: int = Field(
        default=DEFAULT_NUM_ROWS,
        description="Number of services requested when --num-rows is not given",
    )

    # Startup behaviour
    fail_fast_config: bool = Field(
        default=False,
        description="Validate every API key at startup instead of only the one in use",
    )
    log_level: str = Field(default="WARNING", description="Python logging level name")

    @field_validator("default_num_rows")
    @classmethod
    def validate_num_rows(cls, v: int) -> int:
        """Validate the row limit fits the service's 1-255 range."""
        if not 1 <= v <= 255:
            raise ValueError("default_num_rows must be between 1 and 255")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate the request timeout is positive."""
        if v <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level
