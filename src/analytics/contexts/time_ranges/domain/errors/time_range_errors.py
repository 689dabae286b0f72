from __future__ import annotations


class TimeRangeDomainError(ValueError):
    """
    Base deterministic domain error for the time ranges bounded context.

    Docs:
      - docs/architecture/time-ranges/time-range-engine-v1.md
    Related:
      - src/analytics/contexts/time_ranges/application/use_cases/errors.py
      - src/analytics/platform/errors/dashboard_error.py
    """


class InvalidRangeError(TimeRangeDomainError):
    """
    Raised when a custom range is constructed with `end < start`.

    Bounds are never swapped silently.
    """


class DecodeError(TimeRangeDomainError):
    """
    Raised when a persisted range token is neither a known range name nor a `start:end` pair.

    Callers substitute a documented default range instead of propagating the failure.
    """

    def __init__(self, message: str, *, token: str) -> None:
        super().__init__(message)
        self._token = token

    @property
    def token(self) -> str:
        """Return the raw token that failed to decode."""
        return self._token


class CalendarArithmeticError(TimeRangeDomainError):
    """
    Raised when calendar arithmetic leaves the representable datetime range.

    Signals a programming-logic bug rather than a recoverable runtime condition.
    """
