from __future__ import annotations

from enum import Enum


class Granularity(str, Enum):
    """
    Bucketing unit for charting a resolved interval.

    Derived deterministically from the interval duration; the stats query and the graph
    query must share one computed value.
    """

    HOUR = "hour"
    DAY = "day"
    MONTH = "month"


class LabelStyle(str, Enum):
    """
    Display style for axis ticks and tooltips.

    A superset of `Granularity`: `YEAR`, `DAY_YEAR` and `DAY_HOUR` exist only for formatting
    very wide or very narrow ranges and are never used for bucketing.
    """

    HOUR = "hour"
    DAY_HOUR = "day+hour"
    DAY = "day"
    DAY_YEAR = "day+year"
    MONTH = "month"
    YEAR = "year"
