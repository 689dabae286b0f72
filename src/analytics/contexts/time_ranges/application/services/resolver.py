from __future__ import annotations

import math
from datetime import timedelta

from analytics.contexts.time_ranges.domain import (
    DEFAULT_CALENDAR,
    Bucket,
    CalendarSettings,
    CustomRangeSpec,
    Granularity,
    NamedRangeSpec,
    RangeName,
    RangeSpec,
)
from analytics.shared_kernel.primitives import TimeRange, UtcTimestamp

from .calendar_math import (
    DAY,
    HOUR,
    CalendarUnit,
    add_units,
    end_of,
    months_between,
    shift_absolute,
    start_of,
)

_ONE_MILLISECOND = timedelta(milliseconds=1)
_HOURLY_BELOW = timedelta(days=2)
# "About two months": anything shorter is charted per day.
_DAILY_BELOW = timedelta(days=60)


def resolve(
    spec: RangeSpec,
    now: UtcTimestamp,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
) -> TimeRange:
    """
    Turn a range spec into a concrete half-open interval evaluated against `now`.

    Docs:
      - docs/architecture/time-ranges/time-range-engine-v1.md
    Related:
      - src/analytics/contexts/time_ranges/application/services/navigator.py
      - src/analytics/contexts/time_ranges/application/use_cases/time_range_engine.py

    Args:
        spec: Named or custom range spec.
        now: Single evaluation instant shared by the whole evaluation pass.
        cal: Calendar timezone and first weekday.
    Returns:
        TimeRange: Concrete `[start, end)` interval.
    Assumptions:
        "End of current hour/day/month" is the next boundary at or after `now`.
    Raises:
        CalendarArithmeticError: Only for instants near the datetime limits.
    Side Effects:
        None.
    """
    if isinstance(spec, CustomRangeSpec):
        return TimeRange(spec.start, spec.end)
    return _resolve_named(spec, now, cal)


def _resolve_named(spec: NamedRangeSpec, now: UtcTimestamp, cal: CalendarSettings) -> TimeRange:
    name = spec.name
    if name is RangeName.TODAY:
        return TimeRange(start_of(now, CalendarUnit.DAY, cal), end_of(now, CalendarUnit.HOUR, cal))
    if name is RangeName.YESTERDAY:
        today_start = start_of(now, CalendarUnit.DAY, cal)
        return TimeRange(add_units(today_start, CalendarUnit.DAY, -1, cal), today_start)
    if name is RangeName.LAST_7_DAYS:
        return _last_days(now, 7, cal)
    if name is RangeName.LAST_30_DAYS:
        return _last_days(now, 30, cal)
    if name is RangeName.LAST_12_MONTHS:
        end = end_of(now, CalendarUnit.MONTH, cal)
        return TimeRange(add_units(end, CalendarUnit.MONTH, -12, cal), end)
    if name is RangeName.WEEK_TO_DATE:
        return TimeRange(start_of(now, CalendarUnit.WEEK, cal), now)
    if name is RangeName.MONTH_TO_DATE:
        return TimeRange(start_of(now, CalendarUnit.MONTH, cal), now)
    return TimeRange(start_of(now, CalendarUnit.YEAR, cal), now)


def _last_days(now: UtcTimestamp, days: int, cal: CalendarSettings) -> TimeRange:
    # Rolling window anchored at the end of the current day, not calendar-aligned.
    end = end_of(now, CalendarUnit.DAY, cal)
    return TimeRange(add_units(end, CalendarUnit.DAY, -days, cal), end)


def granularity_of(interval: TimeRange) -> Granularity:
    """
    Pick the bucketing unit from the interval duration.

    `< 2 days` -> hour, `< 60 days` -> day, otherwise month. Compute once per evaluation and
    hand the same value to the stats and the graph query.
    """
    duration = interval.duration()
    if duration < _HOURLY_BELOW:
        return Granularity.HOUR
    if duration < _DAILY_BELOW:
        return Granularity.DAY
    return Granularity.MONTH


def bucket_count_of(
    interval: TimeRange,
    granularity: Granularity,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
) -> int:
    """
    Number of `granularity` units spanned by `[start, end)`, a trailing partial unit counted.

    An empty interval has zero buckets. The count depends only on `(interval, granularity)`,
    never on the length of a series returned by the query layer.
    """
    if interval.is_empty():
        return 0
    if granularity is Granularity.HOUR:
        return math.ceil(interval.duration() / HOUR)
    if granularity is Granularity.DAY:
        return math.ceil(interval.duration() / DAY)
    return months_between(interval.start, interval.end, cal)


def buckets_of(
    interval: TimeRange,
    granularity: Granularity,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
) -> tuple[Bucket, ...]:
    """
    Split `[start, end)` into `bucket_count_of` contiguous equal parts.

    Args:
        interval: Resolved interval.
        granularity: Granularity chosen by `granularity_of`.
        cal: Calendar settings (month counting).
    Returns:
        tuple[Bucket, ...]: Ascending buckets; first starts at `interval.start`, last ends at
        `interval.end`.
    Assumptions:
        Boundaries are computed in integer milliseconds, as the query layer bins them.
    Raises:
        None.
    Side Effects:
        None.
    """
    count = bucket_count_of(interval, granularity, cal=cal)
    if count == 0:
        return ()
    start_ms = interval.start.epoch_ms()
    span_ms = interval.end.epoch_ms() - start_ms
    edges = [
        UtcTimestamp.from_epoch_ms(start_ms + (index * span_ms) // count)
        for index in range(count + 1)
    ]
    return tuple(
        Bucket(index=index, start=edges[index], end=edges[index + 1])
        for index in range(count)
    )


def ends_today(
    spec: RangeSpec,
    now: UtcTimestamp,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
) -> bool:
    """Whether the last instant covered by the resolved range falls on the day of `now`."""
    last_covered = last_covered_instant(resolve(spec, now, cal=cal))
    today_start = start_of(now, CalendarUnit.DAY, cal)
    tomorrow_start = add_units(today_start, CalendarUnit.DAY, 1, cal)
    return today_start.value <= last_covered.value < tomorrow_start.value


def last_covered_instant(interval: TimeRange) -> UtcTimestamp:
    """Last millisecond inside `[start, end)`; `start` itself for an empty interval."""
    if interval.is_empty():
        return interval.start
    return shift_absolute(interval.end, -_ONE_MILLISECOND)


__all__ = [
    "bucket_count_of",
    "buckets_of",
    "ends_today",
    "granularity_of",
    "last_covered_instant",
    "resolve",
]
