"""Protocol for periodic refresh ticks."""

from typing import Protocol


class TickerProtocol(Protocol):
    """Protocol for a fixed-period timer awaited by the refresh loop."""

    async def tick(self) -> None:
        """Wait until the next tick is due.

        Returns immediately if the deadline has already passed.
        """
        ...
