from __future__ import annotations

from enum import Enum


class RangeName(str, Enum):
    """
    Fixed, ordered catalog of named ranges a user can select.

    Docs:
      - docs/architecture/time-ranges/time-range-engine-v1.md
    Related:
      - src/analytics/contexts/time_ranges/application/services/resolver.py
      - src/analytics/contexts/time_ranges/application/services/serializer.py
    """

    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7_DAYS = "last7Days"
    LAST_30_DAYS = "last30Days"
    LAST_12_MONTHS = "last12Months"
    WEEK_TO_DATE = "weekToDate"
    MONTH_TO_DATE = "monthToDate"
    YEAR_TO_DATE = "yearToDate"

    @property
    def display_name(self) -> str:
        """Fixed human label shown in the range picker and summary."""
        return _DISPLAY_NAMES[self]

    @property
    def is_rolling(self) -> bool:
        """Rolling `last*` windows move with "now" instead of a calendar boundary."""
        return self.value.startswith("last")

    @classmethod
    def from_token(cls, token: str) -> RangeName | None:
        """Look up a range by its persisted identifier; `None` when unknown."""
        return _BY_TOKEN.get(token)


_DISPLAY_NAMES: dict[RangeName, str] = {
    RangeName.TODAY: "Today",
    RangeName.YESTERDAY: "Yesterday",
    RangeName.LAST_7_DAYS: "Last 7 Days",
    RangeName.LAST_30_DAYS: "Last 30 Days",
    RangeName.LAST_12_MONTHS: "Last 12 Months",
    RangeName.WEEK_TO_DATE: "Week to Date",
    RangeName.MONTH_TO_DATE: "Month to Date",
    RangeName.YEAR_TO_DATE: "Year to Date",
}

_BY_TOKEN: dict[str, RangeName] = {item.value: item for item in RangeName}
