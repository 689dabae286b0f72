from datetime import datetime, timedelta, timezone

import pytest

from analytics.shared_kernel.primitives import UtcTimestamp


def test_utc_timestamp_rejects_naive_datetime() -> None:
    with pytest.raises(ValueError):
        UtcTimestamp(datetime(2024, 11, 15, 12, 0))


def test_utc_timestamp_truncates_to_milliseconds_and_normalizes_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))
    ts = UtcTimestamp(datetime(2024, 11, 15, 14, 30, 1, 123456, tzinfo=plus_two))

    assert ts.value == datetime(2024, 11, 15, 12, 30, 1, 123000, tzinfo=timezone.utc)
    assert str(ts) == "2024-11-15T12:30:01.123Z"


def test_utc_timestamp_epoch_ms_conversion_is_exact() -> None:
    ts = UtcTimestamp.from_epoch_ms(1731628800000)

    assert str(ts) == "2024-11-15T00:00:00.000Z"
    assert ts.epoch_ms() == 1731628800000
    assert UtcTimestamp.from_epoch_ms(-1).epoch_ms() == -1


def test_utc_timestamp_ordering_and_shift() -> None:
    earlier = UtcTimestamp(datetime(2024, 11, 15, 0, 0, tzinfo=timezone.utc))
    later = earlier.shifted(timedelta(hours=1))

    assert earlier < later
    assert str(later) == "2024-11-15T01:00:00.000Z"
    assert later.shifted(timedelta(hours=-1)) == earlier
