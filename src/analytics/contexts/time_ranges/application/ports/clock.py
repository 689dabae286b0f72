from __future__ import annotations

from typing import Protocol

from analytics.shared_kernel.primitives import UtcTimestamp


class Clock(Protocol):
    """
    Clock: source of "now" for the time ranges application layer, in UTC.

    Contract:
    - now() -> UtcTimestamp
    - read once per evaluation pass so resolver, navigator and bucketizer agree on "now"
    """

    def now(self) -> UtcTimestamp:
        ...
