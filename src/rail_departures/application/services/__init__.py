"""Application services (use cases) for live station boards."""

from rail_departures.application.services.interval_ticker import IntervalTicker
from rail_departures.application.services.refresh_scheduler import (
    RefreshScheduler,
    SchedulerState,
    describe_fetch_error,
)
from rail_departures.application.services.service_normalizer import (
    build_board,
    expected_minutes,
    normalize,
)

__all__ = [
    "IntervalTicker",
    "RefreshScheduler",
    "SchedulerState",
    "build_board",
    "describe_fetch_error",
    "expected_minutes",
    "normalize",
]
