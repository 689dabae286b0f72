from __future__ import annotations

from datetime import datetime, timezone

from analytics.contexts.time_ranges.application.ports import Clock
from analytics.shared_kernel.primitives import UtcTimestamp


class SystemClock(Clock):
    """
    SystemClock: platform implementation of Clock, reading "now" from the system wall clock.

    Returns UtcTimestamp(datetime.now(timezone.utc)).
    """

    def now(self) -> UtcTimestamp:
        return UtcTimestamp(datetime.now(timezone.utc))
