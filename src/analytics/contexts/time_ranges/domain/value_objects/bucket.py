from __future__ import annotations

from dataclasses import dataclass

from analytics.shared_kernel.primitives import UtcTimestamp


@dataclass(frozen=True, slots=True)
class Bucket:
    """
    One chart bucket `[start, end)` of a resolved interval.

    Invariants:
    - index >= 0
    - start <= end; consecutive buckets satisfy `bucket[i].end == bucket[i + 1].start`
    """

    index: int
    start: UtcTimestamp
    end: UtcTimestamp

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Bucket.index must be >= 0, got {self.index}")
        if self.end.value < self.start.value:
            raise ValueError(f"Bucket requires start <= end, got start={self.start} end={self.end}")

    def is_partial(self, now: UtcTimestamp) -> bool:
        """A bucket that ends after `now` has not fully elapsed yet."""
        return self.end.value > now.value


@dataclass(frozen=True, slots=True)
class DataPoint:
    """Time-stamped, metric-scaled chart point (one per bucket)."""

    timestamp: UtcTimestamp
    value: float
