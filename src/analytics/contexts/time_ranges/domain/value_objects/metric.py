from __future__ import annotations

from enum import Enum

# Averages travel over the wire as integer thousandths.
_FIXED_POINT_DIVISOR = 1000.0


class Metric(str, Enum):
    """
    Graphable dashboard metrics.

    Related:
      - src/analytics/contexts/time_ranges/application/services/bucketizer.py
      - src/analytics/contexts/time_ranges/adapters/outbound/query/range_query.py
    """

    VIEWS = "views"
    SESSIONS = "sessions"
    UNIQUE_VISITORS = "unique_visitors"
    AVG_VIEWS_PER_SESSION = "avg_views_per_session"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def scale(self, value: float) -> float:
        """Convert a raw per-bucket value into display units."""
        if self is Metric.AVG_VIEWS_PER_SESSION:
            return value / _FIXED_POINT_DIVISOR
        return value


_DISPLAY_NAMES: dict[Metric, str] = {
    Metric.VIEWS: "Total Views",
    Metric.SESSIONS: "Total Sessions",
    Metric.UNIQUE_VISITORS: "Unique Visitors",
    Metric.AVG_VIEWS_PER_SESSION: "Avg. Views Per Session",
}
