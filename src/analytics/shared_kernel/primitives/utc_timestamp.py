from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True, order=True)
class UtcTimestamp:
    """
    UtcTimestamp: the single instant type of the dashboard, strictly UTC.

    Rules:
    - the input datetime must be timezone-aware (naive is rejected)
    - the value is stored in UTC
    - precision is truncated to milliseconds (the persisted token resolution)
    """

    value: datetime

    def __post_init__(self) -> None:
        dt = self.value

        # tzinfo may be set while utcoffset() still returns None.
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise ValueError("UtcTimestamp requires a timezone-aware datetime (naive datetime is forbidden)")  # noqa: E501

        dt_utc = dt.astimezone(timezone.utc)

        # Microseconds are truncated down to whole milliseconds.
        ms = (dt_utc.microsecond // 1000) * 1000
        object.__setattr__(self, "value", dt_utc.replace(microsecond=ms))

    @classmethod
    def from_epoch_ms(cls, epoch_ms: int) -> UtcTimestamp:
        """Build a timestamp from integer milliseconds since the Unix epoch."""
        return cls(_EPOCH + timedelta(milliseconds=epoch_ms))

    def epoch_ms(self) -> int:
        """Milliseconds since the Unix epoch (exact, value is ms-truncated)."""
        return (self.value - _EPOCH) // timedelta(milliseconds=1)

    def shifted(self, delta: timedelta) -> UtcTimestamp:
        """Return a new timestamp moved by an absolute duration."""
        return UtcTimestamp(self.value + delta)

    def __str__(self) -> str:
        """
        ISO-8601 in UTC with milliseconds and a `Z` suffix.
        Example: 2024-11-15T12:34:56.789Z
        """
        s = self.value.isoformat(timespec="milliseconds")
        if s.endswith("+00:00"):
            s = s[:-6] + "Z"
        return s
