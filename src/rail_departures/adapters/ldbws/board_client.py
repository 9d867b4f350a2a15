"""HTTP client for the live departure and arrival board endpoints."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

import aiohttp
from pydantic import ValidationError

from rail_departures.adapters.ldbws.constants import (
    API_KEY_HEADER,
    DEFAULT_HEADERS,
    DEFAULT_NUM_ROWS,
)
from rail_departures.adapters.ldbws.endpoints import ENDPOINTS
from rail_departures.adapters.ldbws.request_log import log_board_request
from rail_departures.domain.errors import DecodeError, NetworkError
from rail_departures.domain.models import BoardKind, RawBoardResponse
from rail_departures.domain.ports.board_repository import BoardRepository

if TYPE_CHECKING:
    from rail_departures.domain.ports.credential_source import CredentialSource

logger = logging.getLogger(__name__)


class RemoteBoardClient(BoardRepository):
    """Fetches raw boards over a single shared aiohttp session.

    The session is created once by the caller for the lifetime of the process
    and is only read here; the client never opens, replaces or closes it.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        credentials: CredentialSource,
        endpoints: Mapping[BoardKind, str] | None = None,
        default_num_rows: int = DEFAULT_NUM_ROWS,
    ) -> None:
        """Initialize the client.

        Args:
            session: Pooled aiohttp session shared across all calls.
            credentials: Source of the per-kind API key.
            endpoints: Base URL per board kind, defaults to the live service.
            default_num_rows: Rows requested when a fetch gives no limit.
        """
        self._session = session
        self._credentials = credentials
        self._endpoints = dict(endpoints) if endpoints is not None else dict(ENDPOINTS)
        self._default_num_rows = default_num_rows

    def _build_url(self, kind: BoardKind, station_code: str) -> str:
        return f"{self._endpoints[kind].rstrip('/')}/{station_code.upper()}"

    async def fetch(
        self,
        kind: BoardKind,
        station_code: str,
        row_limit: int | None = None,
    ) -> RawBoardResponse:
        """Fetch one board for a station.

        Args:
            kind: Departures or arrivals.
            station_code: CRS code, upper-cased before use.
            row_limit: Number of services to request, defaults to 10.

        Returns:
            The decoded board envelope.

        Raises:
            NetworkError: Transport failure, timeout or non-2xx status.
            DecodeError: The body is not the expected JSON envelope.
        """
        url = self._build_url(kind, station_code)
        num_rows = row_limit if row_limit is not None else self._default_num_rows
        params = {"numRows": num_rows}
        headers = {**DEFAULT_HEADERS, API_KEY_HEADER: self._credentials.get_api_key(kind)}

        log_board_request(kind, url, num_rows)

        try:
            async with self._session.get(url, params=params, headers=headers) as response:
                body = await response.read()
                status = response.status
        except asyncio.TimeoutError as e:
            raise NetworkError(f"Request to {url} timed out") from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        if not 200 <= status < 300:
            snippet = body[:200].decode("utf-8", errors="replace").strip()
            logger.debug(f"{url} returned status {status}: {snippet}")
            raise NetworkError(f"API returned status {status}", status_code=status)

        try:
            return RawBoardResponse.model_validate_json(body)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "body"
            raise DecodeError(
                f"Unexpected board response ({e.error_count()} error(s), first at {location}: "
                f"{first['msg']})"
            ) from e
