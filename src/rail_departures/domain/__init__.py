"""Domain layer - core models, errors and ports."""

from rail_departures.domain.models import (
    Board,
    BoardKind,
    ServiceRecord,
    Station,
)
from rail_departures.domain.ports import (
    BoardPresenter,
    BoardRepository,
    CredentialSource,
)

__all__ = [
    "Board",
    "BoardKind",
    "BoardPresenter",
    "BoardRepository",
    "CredentialSource",
    "ServiceRecord",
    "Station",
]
