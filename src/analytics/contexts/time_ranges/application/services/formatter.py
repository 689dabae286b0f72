from __future__ import annotations

from datetime import datetime, timedelta

from analytics.contexts.time_ranges.domain import (
    DEFAULT_CALENDAR,
    CalendarSettings,
    CustomRangeSpec,
    Granularity,
    LabelStyle,
    RangeSpec,
)
from analytics.shared_kernel.primitives import TimeRange, UtcTimestamp

from .calendar_math import local_datetime
from .resolver import granularity_of, last_covered_instant

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_ALL_TIME_LABEL = "All Time"
_RANGE_SEPARATOR = " – "

_ABOUT_A_YEAR = timedelta(days=366)
_SEVERAL_YEARS = timedelta(days=3 * 366)

_AXIS_BY_GRANULARITY = {
    Granularity.HOUR: LabelStyle.HOUR,
    Granularity.DAY: LabelStyle.DAY,
    Granularity.MONTH: LabelStyle.MONTH,
}
_TOOLTIP_BY_GRANULARITY = {
    Granularity.HOUR: LabelStyle.DAY_HOUR,
    Granularity.DAY: LabelStyle.DAY,
    Granularity.MONTH: LabelStyle.MONTH,
}


def summary_label(
    spec: RangeSpec,
    *,
    now: UtcTimestamp,
    cal: CalendarSettings = DEFAULT_CALENDAR,
) -> str:
    """
    Human summary of a range for the range picker.

    Args:
        spec: Range to describe.
        now: Evaluation instant, decides whether the year can be omitted.
        cal: Calendar timezone used for display dates.
    Returns:
        str: Fixed name for named ranges, `All Time` for the all-time variant, otherwise a
        date phrase such as `Nov 1 – Nov 15` naming the first and last covered days.
    Assumptions:
        The year is shown on both bounds unless both fall in the year of `now`.
    Raises:
        CalendarArithmeticError: Only for instants near the datetime limits.
    Side Effects:
        None.
    """
    if not isinstance(spec, CustomRangeSpec):
        return spec.name.display_name
    if spec.is_all_time:
        return _ALL_TIME_LABEL

    # End bound is exclusive; label the last covered day.
    start = local_datetime(spec.start, cal)
    end = local_datetime(last_covered_instant(TimeRange(spec.start, spec.end)), cal)
    current_year = local_datetime(now, cal).year
    style = LabelStyle.DAY
    if start.year != current_year or end.year != current_year:
        style = LabelStyle.DAY_YEAR
    if start.date() == end.date():
        return _render(start, style)
    return f"{_render(start, style)}{_RANGE_SEPARATOR}{_render(end, style)}"


def axis_style(interval: TimeRange) -> LabelStyle:
    """Axis tick style; very wide month ranges fall back to `day+year` and then `year`."""
    granularity = granularity_of(interval)
    if granularity is Granularity.MONTH:
        if interval.duration() > _SEVERAL_YEARS:
            return LabelStyle.YEAR
        if interval.duration() > _ABOUT_A_YEAR:
            return LabelStyle.DAY_YEAR
    return _AXIS_BY_GRANULARITY[granularity]


def tooltip_style(interval: TimeRange) -> LabelStyle:
    """Tooltip style; month ranges spanning more than about a year carry the year."""
    granularity = granularity_of(interval)
    if granularity is Granularity.MONTH and interval.duration() > _ABOUT_A_YEAR:
        return LabelStyle.DAY_YEAR
    return _TOOLTIP_BY_GRANULARITY[granularity]


def axis_label(
    ts: UtcTimestamp,
    granularity: Granularity,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
) -> str:
    return format_label(ts, _AXIS_BY_GRANULARITY[granularity], cal=cal)


def tooltip_label(
    ts: UtcTimestamp,
    granularity: Granularity,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
) -> str:
    return format_label(ts, _TOOLTIP_BY_GRANULARITY[granularity], cal=cal)


def format_label(
    ts: UtcTimestamp,
    style: LabelStyle,
    *,
    cal: CalendarSettings = DEFAULT_CALENDAR,
) -> str:
    """Render one instant in en-US style in the calendar timezone."""
    return _render(local_datetime(ts, cal), style)


def _render(local: datetime, style: LabelStyle) -> str:
    month = _MONTH_ABBR[local.month - 1]
    if style is LabelStyle.YEAR:
        return str(local.year)
    if style is LabelStyle.MONTH:
        # Points sit at bucket midpoints, so the containing month is the bucket's month.
        return month
    if style is LabelStyle.DAY:
        return f"{month} {local.day}"
    if style is LabelStyle.DAY_YEAR:
        return f"{month} {local.day}, {local.year}"
    hour12, meridiem = _twelve_hour(local.hour)
    if style is LabelStyle.DAY_HOUR:
        return f"{month} {local.day}, {hour12} {meridiem}"
    return f"{hour12}:{local.minute:02d} {meridiem}"


def _twelve_hour(hour: int) -> tuple[int, str]:
    meridiem = "AM" if hour < 12 else "PM"
    hour12 = hour % 12
    return (12 if hour12 == 0 else hour12), meridiem


__all__ = [
    "axis_label",
    "axis_style",
    "format_label",
    "summary_label",
    "tooltip_label",
    "tooltip_style",
]
