"""Credential source port."""

from typing import Protocol

from rail_departures.domain.models.board_kind import BoardKind


class CredentialSource(Protocol):
    """Port for looking up the API key that belongs to a board kind."""

    def get_api_key(self, kind: BoardKind) -> str:
        """Return the API key. Raises MissingVarError or EmptyVarError."""
        ...
