from .bucketizer import MetricScale, to_data_points
from .calendar_math import (
    CalendarUnit,
    add_units,
    end_of,
    months_between,
    shift_absolute,
    start_of,
)
from .formatter import (
    axis_label,
    axis_style,
    format_label,
    summary_label,
    tooltip_label,
    tooltip_style,
)
from .navigator import (
    DEFAULT_FALLBACK_PADDING,
    RangeShape,
    classify_shape,
    next_range,
    previous_range,
)
from .refresh_policy import RefreshPolicy, is_live_range, refresh_policy
from .resolver import (
    bucket_count_of,
    buckets_of,
    ends_today,
    granularity_of,
    last_covered_instant,
    resolve,
)
from .serializer import DEFAULT_RANGE, deserialize, deserialize_or_default, serialize

__all__ = [
    "CalendarUnit",
    "DEFAULT_FALLBACK_PADDING",
    "DEFAULT_RANGE",
    "MetricScale",
    "RangeShape",
    "RefreshPolicy",
    "add_units",
    "axis_label",
    "axis_style",
    "bucket_count_of",
    "buckets_of",
    "classify_shape",
    "deserialize",
    "deserialize_or_default",
    "end_of",
    "ends_today",
    "format_label",
    "granularity_of",
    "is_live_range",
    "last_covered_instant",
    "months_between",
    "next_range",
    "previous_range",
    "refresh_policy",
    "resolve",
    "serialize",
    "shift_absolute",
    "start_of",
    "summary_label",
    "to_data_points",
    "tooltip_label",
    "tooltip_style",
]
