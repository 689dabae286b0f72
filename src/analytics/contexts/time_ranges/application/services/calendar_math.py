from __future__ import annotations

import calendar
from datetime import datetime, timedelta, tzinfo
from enum import Enum

from analytics.contexts.time_ranges.domain import CalendarArithmeticError, CalendarSettings
from analytics.shared_kernel.primitives import UtcTimestamp

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)


class CalendarUnit(str, Enum):
    """Calendar units with variable absolute length (DST, month length, leap years)."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def start_of(ts: UtcTimestamp, unit: CalendarUnit, cal: CalendarSettings) -> UtcTimestamp:
    """
    Floor an instant to the beginning of its calendar unit in the calendar timezone.

    Args:
        ts: Instant to floor.
        unit: Calendar unit.
        cal: Calendar timezone and first weekday.
    Returns:
        UtcTimestamp: Unit start, converted back to UTC.
    Assumptions:
        Boundaries are wall-clock boundaries of `cal.zone`.
    Raises:
        CalendarArithmeticError: If the boundary is not representable.
    Side Effects:
        None.
    """
    local = _local_naive(ts, cal.zone)
    if unit is CalendarUnit.HOUR:
        floored = local.replace(minute=0, second=0, microsecond=0)
    elif unit is CalendarUnit.DAY:
        floored = _midnight(local)
    elif unit is CalendarUnit.WEEK:
        days_since_start = (local.weekday() - cal.week_start) % 7
        floored = _shift_naive(_midnight(local), timedelta(days=-days_since_start))
    elif unit is CalendarUnit.MONTH:
        floored = _midnight(local).replace(day=1)
    else:
        floored = _midnight(local).replace(month=1, day=1)
    return _to_utc(floored, cal.zone)


def end_of(ts: UtcTimestamp, unit: CalendarUnit, cal: CalendarSettings) -> UtcTimestamp:
    """
    Ceil an instant to the next boundary of its unit (exclusive end, `[start, end)`).

    An instant already sitting on a boundary is its own end.
    """
    floored = start_of(ts, unit, cal)
    if floored == ts:
        return ts
    return add_units(floored, unit, 1, cal)


def add_units(ts: UtcTimestamp, unit: CalendarUnit, amount: int, cal: CalendarSettings) -> UtcTimestamp:
    """
    Move an instant by whole calendar units in wall-clock time.

    Month and year steps clamp the day of month (Mar 31 - 1 month -> Feb 28/29).

    Args:
        ts: Instant to move.
        unit: Calendar unit.
        amount: Signed number of units.
        cal: Calendar timezone.
    Returns:
        UtcTimestamp: Moved instant in UTC.
    Assumptions:
        Hour steps are absolute; day-and-larger steps keep the local wall-clock time.
    Raises:
        CalendarArithmeticError: If the result leaves the supported datetime range.
    Side Effects:
        None.
    """
    if unit is CalendarUnit.HOUR:
        return shift_absolute(ts, HOUR * amount)

    local = _local_naive(ts, cal.zone)
    if unit is CalendarUnit.DAY:
        moved = _shift_naive(local, timedelta(days=amount))
    elif unit is CalendarUnit.WEEK:
        moved = _shift_naive(local, timedelta(days=7 * amount))
    elif unit is CalendarUnit.MONTH:
        moved = _add_months_naive(local, amount)
    else:
        moved = _add_months_naive(local, 12 * amount)
    return _to_utc(moved, cal.zone)


def months_between(start: UtcTimestamp, end: UtcTimestamp, cal: CalendarSettings) -> int:
    """
    Count calendar months spanned by `[start, end)`, rounding a partial month up.

    Returns 0 for an empty range.
    """
    if end.value <= start.value:
        return 0
    local_start = _local_naive(start, cal.zone)
    local_end = _local_naive(end, cal.zone)
    whole = (local_end.year - local_start.year) * 12 + (local_end.month - local_start.month)
    if _add_months_naive(local_start, whole) > local_end:
        whole -= 1
    if _add_months_naive(local_start, whole) < local_end:
        whole += 1
    return max(whole, 1)


def local_datetime(ts: UtcTimestamp, cal: CalendarSettings) -> datetime:
    """Aware datetime of `ts` in the calendar timezone (for display)."""
    return ts.value.astimezone(cal.zone)


def shift_absolute(ts: UtcTimestamp, delta: timedelta) -> UtcTimestamp:
    """Move an instant by an absolute duration, reporting overflow as `CalendarArithmeticError`."""
    try:
        return ts.shifted(delta)
    except OverflowError as error:
        raise CalendarArithmeticError(f"cannot shift {ts} by {delta}") from error


def _local_naive(ts: UtcTimestamp, zone: tzinfo) -> datetime:
    return ts.value.astimezone(zone).replace(tzinfo=None)


def _midnight(local: datetime) -> datetime:
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def _to_utc(naive_local: datetime, zone: tzinfo) -> UtcTimestamp:
    try:
        return UtcTimestamp(naive_local.replace(tzinfo=zone))
    except (OverflowError, ValueError) as error:
        raise CalendarArithmeticError(f"cannot convert {naive_local!r} to UTC") from error


def _shift_naive(local: datetime, delta: timedelta) -> datetime:
    try:
        return local + delta
    except OverflowError as error:
        raise CalendarArithmeticError(f"cannot shift {local!r} by {delta}") from error


def _add_months_naive(local: datetime, months: int) -> datetime:
    month_index = local.year * 12 + (local.month - 1) + months
    year, month_zero = divmod(month_index, 12)
    month = month_zero + 1
    try:
        last_day = calendar.monthrange(year, month)[1]
        return local.replace(year=year, month=month, day=min(local.day, last_day))
    except (calendar.IllegalMonthError, ValueError) as error:
        raise CalendarArithmeticError(
            f"cannot move {local!r} by {months} month(s)"
        ) from error
