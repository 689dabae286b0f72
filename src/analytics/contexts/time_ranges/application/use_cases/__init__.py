from .build_all_time_range import BuildAllTimeRange, all_time_range
from .errors import dashboard_error_from_time_range_error, validation_error
from .time_range_engine import DEFAULT_MAX_DATA_POINTS, RangeEvaluation, TimeRangeEngine

__all__ = [
    "DEFAULT_MAX_DATA_POINTS",
    "BuildAllTimeRange",
    "RangeEvaluation",
    "TimeRangeEngine",
    "all_time_range",
    "dashboard_error_from_time_range_error",
    "validation_error",
]
