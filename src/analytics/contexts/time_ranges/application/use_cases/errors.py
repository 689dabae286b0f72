from __future__ import annotations

from typing import Any, Mapping, Sequence

from analytics.contexts.time_ranges.domain import (
    CalendarArithmeticError,
    DecodeError,
    InvalidRangeError,
    TimeRangeDomainError,
)
from analytics.platform.errors import DashboardError


def validation_error(
    *,
    message: str,
    errors: Sequence[Mapping[str, str]] | None = None,
) -> DashboardError:
    """
    Build canonical `validation_error` DashboardError with deterministic item ordering.

    Related:
      - src/analytics/contexts/time_ranges/adapters/outbound/query/range_query.py
      - src/analytics/platform/errors/dashboard_error.py

    Args:
        message: Human-readable validation failure message.
        errors: Optional validation items list.
    Returns:
        DashboardError: Canonical deterministic validation error.
    Assumptions:
        Validation item entries contain `path`, `code`, and `message`.
    Raises:
        None.
    Side Effects:
        None.
    """
    details: dict[str, Any] = {}
    if errors is not None:
        details["errors"] = sorted(
            (
                {
                    "path": str(item.get("path", "unknown")),
                    "code": str(item.get("code", "validation_error")),
                    "message": str(item.get("message", "Validation error")),
                }
                for item in errors
            ),
            key=lambda item: (item["path"], item["code"], item["message"]),
        )
    return DashboardError(code="validation_error", message=message, details=details)


def dashboard_error_from_time_range_error(error: TimeRangeDomainError) -> DashboardError:
    """
    Map a time ranges domain error onto the canonical error payload.

    Args:
        error: Domain error raised by the engine.
    Returns:
        DashboardError: `decode_error`, `invalid_range`, or `calendar_error` payload.
    Assumptions:
        Unknown subclasses map to the generic `time_range_error` code.
    Raises:
        None.
    Side Effects:
        None.
    """
    if isinstance(error, DecodeError):
        return DashboardError(
            code="decode_error",
            message="Range token could not be decoded",
            details={"token": error.token, "reason": str(error)},
        )
    if isinstance(error, InvalidRangeError):
        return DashboardError(
            code="invalid_range",
            message="Range end must not precede its start",
            details={"reason": str(error)},
        )
    if isinstance(error, CalendarArithmeticError):
        return DashboardError(
            code="calendar_error",
            message="Calendar arithmetic left the supported date range",
            details={"reason": str(error)},
        )
    return DashboardError(
        code="time_range_error",
        message="Time range could not be processed",
        details={"reason": str(error)},
    )
