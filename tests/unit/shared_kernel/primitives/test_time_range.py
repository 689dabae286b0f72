from datetime import datetime, timedelta, timezone

import pytest

from analytics.shared_kernel.primitives import TimeRange, UtcTimestamp


def _ts(hour: int, minute: int = 0) -> UtcTimestamp:
    return UtcTimestamp(datetime(2024, 11, 15, hour, minute, tzinfo=timezone.utc))


def test_time_range_rejects_reversed_bounds() -> None:
    with pytest.raises(ValueError):
        TimeRange(_ts(12), _ts(11))


def test_time_range_allows_empty_interval() -> None:
    interval = TimeRange(_ts(0), _ts(0))

    assert interval.is_empty()
    assert interval.duration() == timedelta(0)
    assert not interval.contains(_ts(0))


def test_time_range_contains_is_half_open() -> None:
    interval = TimeRange(_ts(10), _ts(12))

    assert interval.contains(_ts(10))
    assert interval.contains(_ts(11, 59))
    assert not interval.contains(_ts(12))
    assert interval.duration() == timedelta(hours=2)


def test_time_range_overlap_ignores_touching_bounds() -> None:
    left = TimeRange(_ts(10), _ts(12))

    assert left.overlap(TimeRange(_ts(11), _ts(13)))
    assert not left.overlap(TimeRange(_ts(12), _ts(13)))


def test_time_range_shifted_moves_both_bounds() -> None:
    shifted = TimeRange(_ts(10), _ts(12)).shifted(timedelta(hours=-2))

    assert shifted == TimeRange(_ts(8), _ts(10))
