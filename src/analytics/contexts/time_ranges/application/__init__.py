from .ports import Clock, EarliestEventReader
from .use_cases import (
    BuildAllTimeRange,
    RangeEvaluation,
    TimeRangeEngine,
    all_time_range,
    dashboard_error_from_time_range_error,
    validation_error,
)

__all__ = [
    "BuildAllTimeRange",
    "Clock",
    "EarliestEventReader",
    "RangeEvaluation",
    "TimeRangeEngine",
    "all_time_range",
    "dashboard_error_from_time_range_error",
    "validation_error",
]
