from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from analytics.contexts.time_ranges.application.services import (
    bucket_count_of,
    buckets_of,
    ends_today,
    granularity_of,
    last_covered_instant,
    resolve,
)
from analytics.contexts.time_ranges.domain import (
    CalendarSettings,
    CustomRangeSpec,
    Granularity,
    NamedRangeSpec,
    RangeName,
)
from analytics.shared_kernel.primitives import TimeRange, UtcTimestamp

# Friday afternoon.
NOW = UtcTimestamp(datetime(2024, 11, 15, 14, 30, tzinfo=timezone.utc))


def _utc(*args: int) -> UtcTimestamp:
    return UtcTimestamp(datetime(*args, tzinfo=timezone.utc))


@pytest.mark.parametrize(
    ("name", "start", "end"),
    [
        (RangeName.TODAY, _utc(2024, 11, 15), _utc(2024, 11, 15, 15)),
        (RangeName.YESTERDAY, _utc(2024, 11, 14), _utc(2024, 11, 15)),
        (RangeName.LAST_7_DAYS, _utc(2024, 11, 9), _utc(2024, 11, 16)),
        (RangeName.LAST_30_DAYS, _utc(2024, 10, 17), _utc(2024, 11, 16)),
        (RangeName.LAST_12_MONTHS, _utc(2023, 12, 1), _utc(2024, 12, 1)),
        (RangeName.WEEK_TO_DATE, _utc(2024, 11, 11), NOW),
        (RangeName.MONTH_TO_DATE, _utc(2024, 11, 1), NOW),
        (RangeName.YEAR_TO_DATE, _utc(2024, 1, 1), NOW),
    ],
)
def test_resolve_named_ranges(name: RangeName, start: UtcTimestamp, end: UtcTimestamp) -> None:
    assert resolve(NamedRangeSpec(name), NOW) == TimeRange(start, end)


def test_resolve_last_7_days_at_midnight_yields_seven_daily_buckets() -> None:
    midnight = _utc(2024, 11, 15)

    interval = resolve(NamedRangeSpec(RangeName.LAST_7_DAYS), midnight)
    granularity = granularity_of(interval)

    assert interval == TimeRange(_utc(2024, 11, 8), _utc(2024, 11, 15))
    assert granularity is Granularity.DAY
    assert bucket_count_of(interval, granularity) == 7


def test_resolve_today_at_midnight_is_empty() -> None:
    interval = resolve(NamedRangeSpec(RangeName.TODAY), _utc(2024, 11, 15))

    assert interval.is_empty()
    assert bucket_count_of(interval, granularity_of(interval)) == 0
    assert buckets_of(interval, granularity_of(interval)) == ()


def test_resolve_custom_returns_its_bounds_unchanged() -> None:
    spec = CustomRangeSpec(start=_utc(2024, 11, 1), end=_utc(2024, 11, 15))

    assert resolve(spec, NOW) == TimeRange(spec.start, spec.end)


def test_resolve_uses_calendar_timezone_for_day_boundaries() -> None:
    new_york = CalendarSettings(zone=ZoneInfo("America/New_York"))

    interval = resolve(NamedRangeSpec(RangeName.YESTERDAY), NOW, cal=new_york)

    # 09:30 local on Nov 15; New York is UTC-5 in November.
    assert interval == TimeRange(_utc(2024, 11, 14, 5), _utc(2024, 11, 15, 5))


@pytest.mark.parametrize(
    ("duration", "expected"),
    [
        (timedelta(hours=1), Granularity.HOUR),
        (timedelta(days=2) - timedelta(milliseconds=1), Granularity.HOUR),
        (timedelta(days=2), Granularity.DAY),
        (timedelta(days=60) - timedelta(milliseconds=1), Granularity.DAY),
        (timedelta(days=60), Granularity.MONTH),
        (timedelta(days=800), Granularity.MONTH),
    ],
)
def test_granularity_thresholds(duration: timedelta, expected: Granularity) -> None:
    start = _utc(2024, 1, 1)

    assert granularity_of(TimeRange(start, start.shifted(duration))) is expected


@pytest.mark.parametrize(
    ("name", "granularity", "count"),
    [
        (RangeName.TODAY, Granularity.HOUR, 15),
        (RangeName.YESTERDAY, Granularity.HOUR, 24),
        (RangeName.LAST_7_DAYS, Granularity.DAY, 7),
        (RangeName.LAST_30_DAYS, Granularity.DAY, 30),
        (RangeName.LAST_12_MONTHS, Granularity.MONTH, 12),
        (RangeName.WEEK_TO_DATE, Granularity.DAY, 5),
        (RangeName.MONTH_TO_DATE, Granularity.DAY, 15),
        (RangeName.YEAR_TO_DATE, Granularity.MONTH, 11),
    ],
)
def test_granularity_and_bucket_count_for_named_ranges(
    name: RangeName,
    granularity: Granularity,
    count: int,
) -> None:
    interval = resolve(NamedRangeSpec(name), NOW)

    assert granularity_of(interval) is granularity
    assert bucket_count_of(interval, granularity) == count


def test_bucket_count_rounds_trailing_partial_unit_up() -> None:
    interval = TimeRange(_utc(2024, 11, 15), _utc(2024, 11, 15, 14, 30))

    assert bucket_count_of(interval, Granularity.HOUR) == 15
    assert bucket_count_of(interval, Granularity.DAY) == 1


def test_buckets_cover_interval_contiguously() -> None:
    interval = resolve(NamedRangeSpec(RangeName.MONTH_TO_DATE), NOW)

    buckets = buckets_of(interval, Granularity.DAY)

    assert len(buckets) == 15
    assert buckets[0].start == interval.start
    assert buckets[-1].end == interval.end
    assert [bucket.index for bucket in buckets] == list(range(15))
    for left, right in zip(buckets, buckets[1:]):
        assert left.end == right.start
    assert buckets[-1].is_partial(_utc(2024, 11, 15, 12))


def test_ends_today_reports_ranges_reaching_the_current_day() -> None:
    assert ends_today(NamedRangeSpec(RangeName.TODAY), NOW)
    assert ends_today(NamedRangeSpec(RangeName.LAST_7_DAYS), NOW)
    assert ends_today(NamedRangeSpec(RangeName.MONTH_TO_DATE), NOW)
    assert not ends_today(NamedRangeSpec(RangeName.YESTERDAY), NOW)
    assert not ends_today(NamedRangeSpec(RangeName.LAST_12_MONTHS), NOW)
    assert not ends_today(CustomRangeSpec(start=_utc(2024, 11, 1), end=_utc(2024, 11, 15)), NOW)


def test_last_covered_instant_is_one_millisecond_before_the_end() -> None:
    november = TimeRange(_utc(2024, 11, 1), _utc(2024, 12, 1))

    assert last_covered_instant(november) == _utc(2024, 11, 30, 23, 59, 59, 999000)
    assert last_covered_instant(TimeRange(_utc(2024, 11, 1), _utc(2024, 11, 1))) == _utc(2024, 11, 1)


def test_ends_today_handles_empty_range_at_the_earliest_instant() -> None:
    earliest = _utc(1, 1, 1)

    assert not ends_today(CustomRangeSpec(start=earliest, end=earliest), NOW)
