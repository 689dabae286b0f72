from .application import (
    BuildAllTimeRange,
    Clock,
    EarliestEventReader,
    RangeEvaluation,
    TimeRangeEngine,
)
from .domain import (
    CustomRangeSpec,
    Granularity,
    Metric,
    NamedRangeSpec,
    RangeName,
    RangeSpec,
    RangeVariant,
)

__all__ = [
    "BuildAllTimeRange",
    "Clock",
    "CustomRangeSpec",
    "EarliestEventReader",
    "Granularity",
    "Metric",
    "NamedRangeSpec",
    "RangeEvaluation",
    "RangeName",
    "RangeSpec",
    "RangeVariant",
    "TimeRangeEngine",
]
