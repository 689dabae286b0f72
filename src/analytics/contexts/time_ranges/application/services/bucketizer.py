from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np

from analytics.contexts.time_ranges.domain import (
    DEFAULT_CALENDAR,
    CalendarSettings,
    DataPoint,
    Granularity,
)
from analytics.shared_kernel.primitives import TimeRange, UtcTimestamp

from .calendar_math import CalendarUnit, start_of
from .resolver import bucket_count_of, granularity_of

log = logging.getLogger(__name__)

MetricScale = Callable[[float], float]

_CURRENT_UNIT: dict[Granularity, CalendarUnit] = {
    Granularity.HOUR: CalendarUnit.HOUR,
    Granularity.DAY: CalendarUnit.DAY,
    Granularity.MONTH: CalendarUnit.MONTH,
}


def _identity(value: float) -> float:
    return value


def to_data_points(
    series: Sequence[float],
    interval: TimeRange,
    metric_scale: MetricScale = _identity,
    *,
    now: UtcTimestamp,
    granularity: Granularity | None = None,
    cal: CalendarSettings = DEFAULT_CALENDAR,
) -> tuple[DataPoint, ...]:
    """
    Convert a flat per-bucket series into time-stamped, scaled chart points.

    Docs:
      - docs/architecture/time-ranges/time-range-engine-v1.md
    Related:
      - src/analytics/contexts/time_ranges/application/services/resolver.py
      - src/analytics/contexts/time_ranges/domain/value_objects/metric.py

    Args:
        series: Ordered per-bucket values from the query layer.
        interval: Resolved interval the series was computed for.
        metric_scale: Unit conversion applied to every value.
        now: Evaluation instant shared with the resolver.
        granularity: Granularity already chosen for `interval`; derived when omitted.
        cal: Calendar settings used for the "current unit" boundary.
    Returns:
        tuple[DataPoint, ...]: One point per bucket at the bucket midpoint, without points
        that fall into the current, not yet elapsed unit or later.
    Assumptions:
        Spacing is derived from `len(series)`; a length that disagrees with
        `bucket_count_of` is tolerated and logged.
    Raises:
        None.
    Side Effects:
        Emits a warning log on series/bucket-count mismatch.
    """
    if len(series) == 0:
        return ()

    resolved_granularity = granularity if granularity is not None else granularity_of(interval)
    expected = bucket_count_of(interval, resolved_granularity, cal=cal)
    if expected != len(series):
        log.warning(
            "series length disagrees with bucket count: series=%s expected=%s granularity=%s",
            len(series),
            expected,
            resolved_granularity.value,
        )

    values = np.asarray(series, dtype=np.float64)
    start_ms = interval.start.epoch_ms()
    step_ms = (interval.end.epoch_ms() - start_ms) / values.shape[0]
    timestamps_ms = np.floor(start_ms + (np.arange(values.shape[0]) + 0.5) * step_ms).astype(np.int64)

    cutoff_ms = start_of(now, _CURRENT_UNIT[resolved_granularity], cal).epoch_ms()
    keep = timestamps_ms < cutoff_ms

    return tuple(
        DataPoint(
            timestamp=UtcTimestamp.from_epoch_ms(int(timestamp_ms)),
            value=metric_scale(float(value)),
        )
        for timestamp_ms, value, kept in zip(timestamps_ms, values, keep)
        if kept
    )


__all__ = [
    "MetricScale",
    "to_data_points",
]
