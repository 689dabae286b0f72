from .time_range_errors import (
    CalendarArithmeticError,
    DecodeError,
    InvalidRangeError,
    TimeRangeDomainError,
)

__all__ = [
    "CalendarArithmeticError",
    "DecodeError",
    "InvalidRangeError",
    "TimeRangeDomainError",
]
