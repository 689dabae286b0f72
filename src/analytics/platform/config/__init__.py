from .time_ranges_config import TimeRangesConfig, load_time_ranges_config

__all__ = [
    "TimeRangesConfig",
    "load_time_ranges_config",
]
