"""
Shared Kernel primitives.

This package re-exports the minimal set of time primitives so that other
modules can import them from one place:

    from analytics.shared_kernel.primitives import TimeRange, UtcTimestamp
"""

from .time_range import TimeRange
from .utc_timestamp import UtcTimestamp

__all__ = [
    "TimeRange",
    "UtcTimestamp",
]
