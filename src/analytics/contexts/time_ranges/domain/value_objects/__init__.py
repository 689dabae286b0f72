from .bucket import Bucket, DataPoint
from .calendar_settings import DEFAULT_CALENDAR, CalendarSettings
from .granularity import Granularity, LabelStyle
from .metric import Metric
from .range_name import RangeName
from .range_spec import CustomRangeSpec, NamedRangeSpec, RangeSpec, RangeVariant

__all__ = [
    "Bucket",
    "CalendarSettings",
    "CustomRangeSpec",
    "DEFAULT_CALENDAR",
    "DataPoint",
    "Granularity",
    "LabelStyle",
    "Metric",
    "NamedRangeSpec",
    "RangeName",
    "RangeSpec",
    "RangeVariant",
]
