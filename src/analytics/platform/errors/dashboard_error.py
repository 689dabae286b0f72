from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class DashboardError(Exception):
    """
    DashboardError: error contract handed from the time range engine to dashboard consumers.

    The UI branches on `code` (`decode_error`, `invalid_range`, `calendar_error`,
    `validation_error`); `message` is shown to the user; `details` carries plain,
    key-sorted diagnostic data.

    Docs:
      - docs/architecture/time-ranges/time-range-engine-v1.md
    Related:
      - src/analytics/contexts/time_ranges/application/use_cases/errors.py
      - src/analytics/contexts/time_ranges/adapters/outbound/query/range_query.py
    """

    code: str
    message: str
    details: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        """
        Strip `code`/`message` and freeze `details` into a plain sorted copy.

        Raises:
            ValueError: If `code` or `message` is blank.
            TypeError: If `details` is given but is not a mapping.
        """
        code = self.code.strip()
        message = self.message.strip()
        if not code:
            raise ValueError("DashboardError.code must be non-empty")
        if not message:
            raise ValueError("DashboardError.message must be non-empty")
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "message", message)

        if self.details is None:
            return
        if not isinstance(self.details, Mapping):
            raise TypeError("DashboardError.details must be a mapping when provided")
        object.__setattr__(self, "details", _plain(self.details))

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_payload(self) -> dict[str, Any]:
        """Response body shape: `{"error": {"code", "message", "details"}}`."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": dict(self.details or {}),
            }
        }


def _plain(value: Any) -> Any:
    # Mappings get string keys in sorted order; tuples and lists become lists.
    if isinstance(value, Mapping):
        return {str(key): _plain(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
