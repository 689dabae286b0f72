from __future__ import annotations

import logging

from analytics.contexts.time_ranges.application.ports import Clock, EarliestEventReader
from analytics.contexts.time_ranges.domain import CustomRangeSpec, RangeVariant
from analytics.shared_kernel.primitives import UtcTimestamp

log = logging.getLogger(__name__)


def all_time_range(*, earliest: UtcTimestamp | None, now: UtcTimestamp) -> CustomRangeSpec:
    """
    Build the `ALL_TIME` custom variant from an earliest-event lookup result.

    Args:
        earliest: First recorded event, or `None` when nothing was recorded yet.
        now: Evaluation instant, used as the end bound.
    Returns:
        CustomRangeSpec: `[earliest, now]` marked `ALL_TIME`; `[now, now]` without events.
    Assumptions:
        An earliest event later than `now` (clock skew) is clamped to `now`.
    Raises:
        None.
    Side Effects:
        None.
    """
    start = now if earliest is None or earliest.value > now.value else earliest
    return CustomRangeSpec(start=start, end=now, variant=RangeVariant.ALL_TIME)


class BuildAllTimeRange:
    """
    Use-case: resolve "all time" for one project through the earliest-event port.

    Docs:
      - docs/architecture/time-ranges/time-range-engine-v1.md
    Related:
      - src/analytics/contexts/time_ranges/application/ports/earliest_event_reader.py
      - src/analytics/contexts/time_ranges/application/use_cases/time_range_engine.py
    """

    def __init__(self, *, reader: EarliestEventReader, clock: Clock) -> None:
        self._reader = reader
        self._clock = clock

    def execute(self, *, project_id: str) -> CustomRangeSpec:
        """
        Look up the earliest event and build the all-time range ending at the current time.

        Args:
            project_id: Opaque project identifier passed through to the port.
        Returns:
            CustomRangeSpec: All-time custom range.
        Assumptions:
            The clock is read exactly once.
        Raises:
            None.
        Side Effects:
            Calls the earliest-event port; logs when the project has no events.
        """
        earliest = self._reader.earliest(project_id=project_id)
        now = self._clock.now()
        if earliest is None:
            log.info("all-time range without events: project_id=%s now=%s", project_id, now)
        return all_time_range(earliest=earliest, now=now)
