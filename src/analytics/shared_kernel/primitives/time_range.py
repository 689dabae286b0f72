from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from .utc_timestamp import UtcTimestamp


@dataclass(frozen=True, slots=True)
class TimeRange:
    """
    TimeRange: a resolved, concrete time interval.

    Semantics:
    - half-open [start, end): start is included, end is not.

    Invariants:
    - start <= end (an empty range is allowed, e.g. "today" evaluated exactly at midnight)
    """

    start: UtcTimestamp
    end: UtcTimestamp

    def __post_init__(self) -> None:
        if self.start.value > self.end.value:
            raise ValueError(
                f"TimeRange requires start <= end, got start={self.start} end={self.end}"
            )

    def duration(self) -> timedelta:
        """Range length as timedelta (end - start)."""
        return self.end.value - self.start.value

    def is_empty(self) -> bool:
        return self.start.value == self.end.value

    def contains(self, ts: UtcTimestamp) -> bool:
        """Membership check with [start, end) semantics."""
        return self.start.value <= ts.value < self.end.value

    def overlap(self, other: TimeRange) -> bool:
        """Whether two half-open ranges intersect."""
        return self.start.value < other.end.value and other.start.value < self.end.value

    def shifted(self, delta: timedelta) -> TimeRange:
        """Move both bounds by the same absolute duration."""
        return TimeRange(self.start.shifted(delta), self.end.shifted(delta))
