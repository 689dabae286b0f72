from .clock import Clock
from .earliest_event_reader import EarliestEventReader

__all__ = [
    "Clock",
    "EarliestEventReader",
]
