from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from analytics.contexts.time_ranges.domain import (
    DEFAULT_CALENDAR,
    CalendarSettings,
    CustomRangeSpec,
    NamedRangeSpec,
    RangeName,
    RangeSpec,
)
from analytics.shared_kernel.primitives import TimeRange, UtcTimestamp

from .calendar_math import DAY, CalendarUnit, add_units, shift_absolute, start_of
from .resolver import resolve

DEFAULT_FALLBACK_PADDING = timedelta(days=1)

# Smallest unit wins: a single day is a day even when it is also the first day of a month.
_CALENDAR_SHAPES = (CalendarUnit.DAY, CalendarUnit.WEEK, CalendarUnit.MONTH, CalendarUnit.YEAR)

_TO_DATE_UNITS: dict[RangeName, CalendarUnit] = {
    RangeName.WEEK_TO_DATE: CalendarUnit.WEEK,
    RangeName.MONTH_TO_DATE: CalendarUnit.MONTH,
    RangeName.YEAR_TO_DATE: CalendarUnit.YEAR,
}


@dataclass(frozen=True, slots=True)
class RangeShape:
    """
    Calendar shape of a resolved interval.

    Exactly one of `unit` (calendar-aligned shift) or `fixed_shift` (absolute shift) is set.
    """

    unit: CalendarUnit | None = None
    fixed_shift: timedelta | None = None

    def __post_init__(self) -> None:
        if (self.unit is None) == (self.fixed_shift is None):
            raise ValueError("RangeShape requires exactly one of unit or fixed_shift")


def classify_shape(
    interval: TimeRange,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
    fallback_padding: timedelta = DEFAULT_FALLBACK_PADDING,
    to_date_unit: CalendarUnit | None = None,
) -> RangeShape:
    """
    Detect how an interval should step to its neighbours.

    Args:
        interval: Resolved interval.
        cal: Calendar timezone and first weekday.
        fallback_padding: Extra gap added to non-aligned ranges of a day or longer.
        to_date_unit: Unit of a named "to date" range, which keeps its calendar shape even
            though it ends at `now`.
    Returns:
        RangeShape: Calendar unit when the interval is exactly one day, week, month or year,
        otherwise an absolute shift.
    Assumptions:
        Sub-day ranges shift by their own duration, longer ones by duration plus padding.
    Raises:
        CalendarArithmeticError: Only for instants near the datetime limits.
    Side Effects:
        None.
    """
    if to_date_unit is not None and start_of(interval.start, to_date_unit, cal) == interval.start:
        unit_end = add_units(interval.start, to_date_unit, 1, cal)
        if interval.end.value <= unit_end.value:
            return RangeShape(unit=to_date_unit)

    for unit in _CALENDAR_SHAPES:
        if start_of(interval.start, unit, cal) != interval.start:
            continue
        if interval.end == add_units(interval.start, unit, 1, cal):
            return RangeShape(unit=unit)

    duration = interval.duration()
    if duration < DAY:
        return RangeShape(fixed_shift=duration)
    return RangeShape(fixed_shift=duration + fallback_padding)


def previous_range(
    spec: RangeSpec,
    now: UtcTimestamp,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
    fallback_padding: timedelta = DEFAULT_FALLBACK_PADDING,
) -> RangeSpec:
    """Comparable range immediately before `spec`; `today` steps back to `yesterday`."""
    if isinstance(spec, NamedRangeSpec) and spec.name is RangeName.TODAY:
        return NamedRangeSpec(RangeName.YESTERDAY)
    return _step(spec, now, -1, cal=cal, fallback_padding=fallback_padding)


def next_range(
    spec: RangeSpec,
    now: UtcTimestamp,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
    fallback_padding: timedelta = DEFAULT_FALLBACK_PADDING,
) -> RangeSpec:
    """
    Comparable range immediately after `spec`.

    Args:
        spec: Current range.
        now: Evaluation instant.
        cal: Calendar timezone and first weekday.
        fallback_padding: Extra gap for non-aligned ranges of a day or longer.
    Returns:
        RangeSpec: `today` for `yesterday`; `spec` itself when its interval already reaches
        `now` (never navigates into the future); otherwise a shifted custom range.
    Assumptions:
        Callers compare by value, the returned no-op is the same object.
    Raises:
        CalendarArithmeticError: Only for instants near the datetime limits.
    Side Effects:
        None.
    """
    if isinstance(spec, NamedRangeSpec) and spec.name is RangeName.YESTERDAY:
        return NamedRangeSpec(RangeName.TODAY)
    if resolve(spec, now, cal=cal).end.value >= now.value:
        return spec
    return _step(spec, now, 1, cal=cal, fallback_padding=fallback_padding)


def _step(
    spec: RangeSpec,
    now: UtcTimestamp,
    direction: int,
    *,
    cal: CalendarSettings,
    fallback_padding: timedelta,
) -> CustomRangeSpec:
    interval = resolve(spec, now, cal=cal)
    to_date_unit = _TO_DATE_UNITS.get(spec.name) if isinstance(spec, NamedRangeSpec) else None
    shape = classify_shape(
        interval,
        cal=cal,
        fallback_padding=fallback_padding,
        to_date_unit=to_date_unit,
    )
    if shape.fixed_shift is not None:
        delta = shape.fixed_shift * direction
        return CustomRangeSpec(
            start=shift_absolute(interval.start, delta),
            end=shift_absolute(interval.end, delta),
        )

    # A "to date" range steps to the whole neighbouring unit, so later steps stay aligned.
    unit = CalendarUnit(shape.unit)
    new_start = add_units(interval.start, unit, direction, cal)
    return CustomRangeSpec(start=new_start, end=add_units(new_start, unit, 1, cal))


__all__ = [
    "DEFAULT_FALLBACK_PADDING",
    "RangeShape",
    "classify_shape",
    "next_range",
    "previous_range",
]
