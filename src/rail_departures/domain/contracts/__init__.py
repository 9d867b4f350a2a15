"""Domain contracts (protocols) used by application services."""

from rail_departures.domain.contracts.ticker import TickerProtocol

__all__ = ["TickerProtocol"]
