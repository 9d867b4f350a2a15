"""Opt-in logging of outgoing board requests (``RAIL_LOG_REQUESTS=true``)."""

import logging
import os

from rail_departures.adapters.ldbws.constants import API_KEY_HEADER
from rail_departures.adapters.ldbws.endpoints import credential_key_for
from rail_departures.domain.models import BoardKind

logger = logging.getLogger(__name__)


def should_log_requests() -> bool:
    """Whether RAIL_LOG_REQUESTS is set to "true" (any case)."""
    return os.getenv("RAIL_LOG_REQUESTS", "").lower() == "true"


def describe_board_request(kind: BoardKind, url: str, num_rows: int) -> str:
    """One-line summary of a board request.

    The API key is shown as the name of the variable it came from, never its value.
    """
    return (
        f"{kind.title} request: GET {url}?numRows={num_rows} "
        f"({API_KEY_HEADER}: <{credential_key_for(kind)}>)"
    )


def log_board_request(kind: BoardKind, url: str, num_rows: int) -> None:
    """Log a board request if request logging is enabled."""
    if should_log_requests():
        logger.info(describe_board_request(kind, url, num_rows))
