from .system_clock import SystemClock

__all__ = [
    "SystemClock",
]
