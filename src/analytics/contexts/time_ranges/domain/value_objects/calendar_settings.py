from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


@dataclass(frozen=True, slots=True)
class CalendarSettings:
    """
    Calendar context for boundary computations (start of day/week/month/year).

    Instants stay UTC; only boundary placement and label rendering use `zone`.

    Invariants:
    - `week_start` is an ISO weekday index, 0 = Monday ... 6 = Sunday.
    """

    zone: tzinfo = timezone.utc
    week_start: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.week_start <= 6:
            raise ValueError(f"CalendarSettings.week_start must be in 0..6, got {self.week_start}")

    @classmethod
    def from_names(cls, *, zone_name: str, week_start_name: str) -> CalendarSettings:
        """
        Build settings from config literals.

        Args:
            zone_name: IANA timezone name, e.g. `Europe/Berlin`.
            week_start_name: Lowercase weekday name, e.g. `monday`.
        Returns:
            CalendarSettings: Validated settings.
        Assumptions:
            Names were stripped by the config loader.
        Raises:
            ValueError: If the zone or weekday is unknown.
        Side Effects:
            Reads the system tz database through `zoneinfo`.
        """
        zone: tzinfo
        if zone_name.strip().upper() == "UTC":
            zone = timezone.utc
        else:
            try:
                zone = ZoneInfo(zone_name.strip())
            except (ZoneInfoNotFoundError, ValueError) as error:
                raise ValueError(f"unknown timezone {zone_name!r}") from error

        normalized_weekday = week_start_name.strip().lower()
        if normalized_weekday not in _WEEKDAYS:
            raise ValueError(f"week_start must be one of {_WEEKDAYS}, got {week_start_name!r}")
        return cls(zone=zone, week_start=_WEEKDAYS.index(normalized_weekday))


DEFAULT_CALENDAR = CalendarSettings()
