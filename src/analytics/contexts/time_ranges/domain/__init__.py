from .errors import (
    CalendarArithmeticError,
    DecodeError,
    InvalidRangeError,
    TimeRangeDomainError,
)
from .value_objects import (
    DEFAULT_CALENDAR,
    Bucket,
    CalendarSettings,
    CustomRangeSpec,
    DataPoint,
    Granularity,
    LabelStyle,
    Metric,
    NamedRangeSpec,
    RangeName,
    RangeSpec,
    RangeVariant,
)

__all__ = [
    "Bucket",
    "CalendarArithmeticError",
    "CalendarSettings",
    "CustomRangeSpec",
    "DEFAULT_CALENDAR",
    "DataPoint",
    "DecodeError",
    "Granularity",
    "InvalidRangeError",
    "LabelStyle",
    "Metric",
    "NamedRangeSpec",
    "RangeName",
    "RangeSpec",
    "RangeVariant",
    "TimeRangeDomainError",
]
