"""Error taxonomy for the rail board refresh engine.

Per-record conversion errors are absorbed while building a board, per-fetch
errors are absorbed by the refresh loop, and only configuration and terminal
restore errors reach the process entry point.
"""


class RailBoardError(Exception):
    """Base class for all rail board errors."""


class ConfigError(RailBoardError):
    """A required configuration value could not be loaded."""

    def __init__(self, var: str, message: str) -> None:
        super().__init__(message)
        self.var = var


class MissingVarError(ConfigError):
    """The environment variable is not set."""

    def __init__(self, var: str) -> None:
        super().__init__(
            var,
            f"Required environment variable '{var}' is not set. "
            "Provide it in your shell or a .env file.",
        )


class EmptyVarError(ConfigError):
    """The environment variable is set but blank."""

    def __init__(self, var: str) -> None:
        super().__init__(
            var,
            f"Environment variable '{var}' is set but empty. "
            "It must contain a non-empty API key.",
        )


class FetchError(RailBoardError):
    """A single board fetch failed. Never fatal for the refresh loop."""


class NetworkError(FetchError):
    """Transport failure, timeout or non-2xx response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(FetchError):
    """The response body is not the expected JSON envelope."""


class ConversionError(RailBoardError):
    """A raw service record cannot become a ServiceRecord."""


class MissingDestinationError(ConversionError):
    """The record's destination list is empty."""

    def __init__(self) -> None:
        super().__init__("API response is missing the destination station")


class MissingOriginError(ConversionError):
    """The record's origin list is empty."""

    def __init__(self) -> None:
        super().__init__("API response is missing the origin station")


class TerminalError(RailBoardError):
    """The terminal could not be switched into or restored from raw mode."""
