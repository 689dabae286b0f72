from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from analytics.contexts.time_ranges.application.services import (
    CalendarUnit,
    RangeShape,
    classify_shape,
    next_range,
    previous_range,
    resolve,
)
from analytics.contexts.time_ranges.domain import (
    CalendarArithmeticError,
    CustomRangeSpec,
    NamedRangeSpec,
    RangeName,
)
from analytics.shared_kernel.primitives import TimeRange, UtcTimestamp

# Friday afternoon.
NOW = UtcTimestamp(datetime(2024, 11, 15, 14, 30, tzinfo=timezone.utc))


def _utc(*args: int) -> UtcTimestamp:
    return UtcTimestamp(datetime(*args, tzinfo=timezone.utc))


def _custom(start: UtcTimestamp, end: UtcTimestamp) -> CustomRangeSpec:
    return CustomRangeSpec(start=start, end=end)


def test_today_and_yesterday_step_into_each_other() -> None:
    assert previous_range(NamedRangeSpec(RangeName.TODAY), NOW) == NamedRangeSpec(RangeName.YESTERDAY)
    assert next_range(NamedRangeSpec(RangeName.YESTERDAY), NOW) == NamedRangeSpec(RangeName.TODAY)


def test_previous_of_yesterday_is_the_day_before() -> None:
    previous = previous_range(NamedRangeSpec(RangeName.YESTERDAY), NOW)

    assert previous == _custom(_utc(2024, 11, 13), _utc(2024, 11, 14))


@pytest.mark.parametrize(
    "spec",
    [
        NamedRangeSpec(RangeName.TODAY),
        NamedRangeSpec(RangeName.LAST_7_DAYS),
        NamedRangeSpec(RangeName.MONTH_TO_DATE),
        NamedRangeSpec(RangeName.LAST_12_MONTHS),
        CustomRangeSpec(start=_utc(2024, 11, 1), end=_utc(2024, 12, 1)),
        CustomRangeSpec(start=_utc(2024, 11, 15, 10), end=_utc(2024, 11, 15, 14, 30)),
    ],
)
def test_next_never_navigates_into_the_future(spec: CustomRangeSpec | NamedRangeSpec) -> None:
    stepped = next_range(spec, NOW)

    assert stepped is spec
    assert resolve(stepped, NOW) == resolve(spec, NOW)


@pytest.mark.parametrize(
    ("month_start", "month_end"),
    [
        (_utc(2024, 9, 1), _utc(2024, 10, 1)),
        (_utc(2024, 3, 1), _utc(2024, 4, 1)),
        (_utc(2024, 1, 1), _utc(2024, 2, 1)),
    ],
)
def test_month_aligned_navigation_is_symmetric(month_start: UtcTimestamp, month_end: UtcTimestamp) -> None:
    month = _custom(month_start, month_end)

    previous = previous_range(month, NOW)

    assert resolve(previous, NOW).end == month_start
    assert resolve(next_range(previous, NOW), NOW) == resolve(month, NOW)


def test_month_aligned_steps_follow_calendar_month_lengths() -> None:
    march = _custom(_utc(2024, 3, 1), _utc(2024, 4, 1))

    assert previous_range(march, NOW) == _custom(_utc(2024, 2, 1), _utc(2024, 3, 1))
    assert next_range(march, NOW) == _custom(_utc(2024, 4, 1), _utc(2024, 5, 1))


def test_month_to_date_on_january_31_steps_back_into_december() -> None:
    now = _utc(2024, 1, 31, 14, 30)

    previous = previous_range(NamedRangeSpec(RangeName.MONTH_TO_DATE), now)
    interval = resolve(previous, now)

    assert interval == TimeRange(_utc(2023, 12, 1), _utc(2024, 1, 1))
    assert previous_range(previous, now) == _custom(_utc(2023, 11, 1), _utc(2023, 12, 1))


def test_week_and_year_to_date_step_to_whole_previous_unit() -> None:
    assert previous_range(NamedRangeSpec(RangeName.WEEK_TO_DATE), NOW) == _custom(
        _utc(2024, 11, 4),
        _utc(2024, 11, 11),
    )
    assert previous_range(NamedRangeSpec(RangeName.YEAR_TO_DATE), NOW) == _custom(
        _utc(2023, 1, 1),
        _utc(2024, 1, 1),
    )


def test_week_aligned_custom_range_steps_by_weeks() -> None:
    week = _custom(_utc(2024, 11, 4), _utc(2024, 11, 11))

    assert previous_range(week, NOW) == _custom(_utc(2024, 10, 28), _utc(2024, 11, 4))
    assert next_range(week, NOW) == _custom(_utc(2024, 11, 11), _utc(2024, 11, 18))


def test_single_day_on_month_start_is_a_day_shape() -> None:
    first_of_month = _custom(_utc(2024, 11, 1), _utc(2024, 11, 2))

    assert previous_range(first_of_month, NOW) == _custom(_utc(2024, 10, 31), _utc(2024, 11, 1))


def test_week_long_range_starting_on_month_start_uses_padded_shift() -> None:
    spec = _custom(_utc(2024, 11, 1), _utc(2024, 11, 8))

    assert previous_range(spec, NOW) == _custom(_utc(2024, 10, 24), _utc(2024, 10, 31))


def test_non_aligned_range_shifts_by_duration_plus_padding() -> None:
    spec = _custom(_utc(2024, 11, 1), _utc(2024, 11, 4))

    assert previous_range(spec, NOW) == _custom(_utc(2024, 10, 28), _utc(2024, 10, 31))
    assert next_range(spec, NOW) == _custom(_utc(2024, 11, 5), _utc(2024, 11, 8))


def test_padding_is_configurable() -> None:
    spec = _custom(_utc(2024, 11, 1), _utc(2024, 11, 4))

    previous = previous_range(spec, NOW, fallback_padding=timedelta(0))

    assert previous == _custom(_utc(2024, 10, 29), _utc(2024, 11, 1))


def test_last_7_days_previous_uses_padded_shift() -> None:
    previous = previous_range(NamedRangeSpec(RangeName.LAST_7_DAYS), NOW)

    assert previous == _custom(_utc(2024, 11, 1), _utc(2024, 11, 8))


def test_sub_day_range_shifts_by_its_own_duration() -> None:
    spec = _custom(_utc(2024, 11, 14, 10), _utc(2024, 11, 14, 13))

    assert previous_range(spec, NOW) == _custom(_utc(2024, 11, 14, 7), _utc(2024, 11, 14, 10))
    assert next_range(spec, NOW) == _custom(_utc(2024, 11, 14, 13), _utc(2024, 11, 14, 16))


def test_classify_shape_detects_calendar_units() -> None:
    assert classify_shape(TimeRange(_utc(2024, 1, 1), _utc(2025, 1, 1))) == RangeShape(unit=CalendarUnit.YEAR)
    assert classify_shape(TimeRange(_utc(2024, 2, 1), _utc(2024, 3, 1))) == RangeShape(unit=CalendarUnit.MONTH)
    assert classify_shape(
        TimeRange(_utc(2024, 11, 1), _utc(2024, 11, 15)),
        to_date_unit=CalendarUnit.MONTH,
    ) == RangeShape(unit=CalendarUnit.MONTH)
    assert classify_shape(TimeRange(_utc(2024, 11, 2), _utc(2024, 11, 3, 12))) == RangeShape(
        fixed_shift=timedelta(days=2, hours=12),
    )


def test_range_shape_requires_exactly_one_kind() -> None:
    with pytest.raises(ValueError):
        RangeShape()
    with pytest.raises(ValueError):
        RangeShape(unit=CalendarUnit.DAY, fixed_shift=timedelta(hours=1))


def test_fixed_shift_past_the_earliest_instant_is_a_calendar_error() -> None:
    first_hour = _custom(UtcTimestamp.from_epoch_ms(-62135596800000), UtcTimestamp.from_epoch_ms(-62135593200000))

    assert first_hour.start == _utc(1, 1, 1)
    with pytest.raises(CalendarArithmeticError):
        previous_range(first_hour, NOW)
