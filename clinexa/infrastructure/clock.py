"""Clock Adapters.

Implementations of ClockPort. SystemClock reads the UTC wall clock; FixedClock
returns a pinned instant so age derivation is reproducible in tests and replays.
"""

import logging
from datetime import datetime, timedelta, timezone

from clinexa.domain.ports import ClockPort

logger = logging.getLogger(__name__)


class SystemClock(ClockPort):
    """Current instant from the system clock, in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(ClockPort):
    """Clock pinned to a single instant.

    Parameters:
        instant: Timezone-aware instant to report

    Raises:
        ValueError: If ``instant`` is naive
    """

    def __init__(self, instant: datetime):
        if instant.tzinfo is None or instant.utcoffset() is None:
            raise ValueError("FixedClock requires a timezone-aware datetime")
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> None:
        """Move the pinned instant by ``delta``."""
        self._instant = self._instant + delta
        logger.debug(f"FixedClock advanced by {delta}")
