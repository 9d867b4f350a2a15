"""Ports (interfaces) for the ports-and-adapters architecture."""

from rail_departures.domain.ports.board_presenter import BoardPresenter
from rail_departures.domain.ports.board_repository import BoardRepository
from rail_departures.domain.ports.credential_source import CredentialSource

__all__ = [
    "BoardPresenter",
    "BoardRepository",
    "CredentialSource",
]
