from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from analytics.contexts.time_ranges.domain import NamedRangeSpec, RangeName, RangeSpec

DEFAULT_LIVE_REFETCH = timedelta(minutes=1)
DEFAULT_STALE = timedelta(minutes=10)


@dataclass(frozen=True, slots=True)
class RefreshPolicy:
    """
    How often a consumer re-runs resolution and queries for one range.

    Parameters:
    - refetch_interval: periodic re-evaluation interval, `None` for static ranges.
    - stale_time: how long fetched data counts as fresh.
    """

    refetch_interval: timedelta | None
    stale_time: timedelta

    @property
    def is_live(self) -> bool:
        return self.refetch_interval is not None


def is_live_range(spec: RangeSpec) -> bool:
    """`today` and every rolling `last*` range move with the clock."""
    if not isinstance(spec, NamedRangeSpec):
        return False
    return spec.name is RangeName.TODAY or spec.name.is_rolling


def refresh_policy(
    spec: RangeSpec,
    *,
    live_refetch: timedelta = DEFAULT_LIVE_REFETCH,
    stale: timedelta = DEFAULT_STALE,
) -> RefreshPolicy:
    """
    Choose the refresh cadence for a range.

    Args:
        spec: Range being displayed.
        live_refetch: Refetch interval for live ranges.
        stale: Stale time for static ranges.
    Returns:
        RefreshPolicy: Live ranges refetch every `live_refetch` and are never fresh;
        static ranges never refetch and stay fresh for `stale`.
    Assumptions:
        The engine owns no timers; the caller schedules re-evaluation.
    Raises:
        ValueError: If a duration is not positive.
    Side Effects:
        None.
    """
    if live_refetch <= timedelta(0):
        raise ValueError(f"live_refetch must be > 0, got {live_refetch}")
    if stale <= timedelta(0):
        raise ValueError(f"stale must be > 0, got {stale}")
    if is_live_range(spec):
        return RefreshPolicy(refetch_interval=live_refetch, stale_time=timedelta(0))
    return RefreshPolicy(refetch_interval=None, stale_time=stale)


__all__ = [
    "DEFAULT_LIVE_REFETCH",
    "DEFAULT_STALE",
    "RefreshPolicy",
    "is_live_range",
    "refresh_policy",
]
