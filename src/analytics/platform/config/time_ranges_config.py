"""
Runtime config loader for the time ranges engine.

Docs: docs/architecture/time-ranges/time-range-engine-v1.md
Related: analytics.contexts.time_ranges.application.use_cases.time_range_engine,
  analytics.contexts.time_ranges.adapters.outbound.query.range_query
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Mapping

import yaml

from analytics.contexts.time_ranges.application.services import deserialize
from analytics.contexts.time_ranges.domain import CalendarSettings, DecodeError, RangeSpec

_ENV_NAME_KEY = "DASHBOARD_ENV"
_CONFIG_PATH_KEY = "DASHBOARD_TIME_RANGES_CONFIG"
_ALLOWED_ENVS = ("dev", "prod", "test")
_SECTION = "time_ranges"

_TIMEZONE_ENV_KEYS = ("DASHBOARD_TIMEZONE",)
_WEEK_START_ENV_KEYS = ("DASHBOARD_WEEK_START",)
_DEFAULT_RANGE_ENV_KEYS = ("DASHBOARD_DEFAULT_RANGE",)
_PADDING_ENV_KEYS = ("DASHBOARD_FALLBACK_PADDING_DAYS",)
_MAX_POINTS_ENV_KEYS = ("DASHBOARD_MAX_DATA_POINTS",)
_REFETCH_ENV_KEYS = ("DASHBOARD_LIVE_REFETCH_SECONDS",)
_STALE_ENV_KEYS = ("DASHBOARD_STALE_SECONDS",)

_DEFAULT_TIMEZONE = "UTC"
_DEFAULT_WEEK_START = "monday"
_DEFAULT_RANGE_TOKEN = "last7Days"
_DEFAULT_FALLBACK_PADDING_DAYS = 1
_DEFAULT_MAX_DATA_POINTS = 100
_DEFAULT_LIVE_REFETCH_SECONDS = 60
_DEFAULT_STALE_SECONDS = 600


@dataclass(frozen=True, slots=True)
class TimeRangesConfig:
    """
    Immutable runtime config for the time ranges engine.

    Docs: docs/architecture/time-ranges/time-range-engine-v1.md
    Related: analytics.contexts.time_ranges.application.use_cases.time_range_engine
    """

    timezone: str = _DEFAULT_TIMEZONE
    week_start: str = _DEFAULT_WEEK_START
    default_range: str = _DEFAULT_RANGE_TOKEN
    fallback_padding_days: int = _DEFAULT_FALLBACK_PADDING_DAYS
    max_data_points: int = _DEFAULT_MAX_DATA_POINTS
    live_refetch_seconds: int = _DEFAULT_LIVE_REFETCH_SECONDS
    stale_seconds: int = _DEFAULT_STALE_SECONDS

    def __post_init__(self) -> None:
        """
        Validate engine config invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Durations and limits are integers; padding may be zero.
        Raises:
            ValueError: If any value violates required bounds or names an unknown
                timezone, weekday, or range token.
        Side Effects:
            Normalizes `week_start` to lowercase.
        """
        if self.fallback_padding_days < 0:
            raise ValueError(
                "fallback_padding_days must be >= 0, "
                f"got {self.fallback_padding_days}"
            )
        for name in ("max_data_points", "live_refetch_seconds", "stale_seconds"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        object.__setattr__(self, "week_start", self.week_start.strip().lower())
        self.calendar()
        try:
            deserialize(self.default_range)
        except DecodeError as error:
            raise ValueError(f"default_range is not a valid range token: {self.default_range!r}") from error

    def calendar(self) -> CalendarSettings:
        """Calendar timezone and first weekday used by every boundary computation."""
        return CalendarSettings.from_names(zone_name=self.timezone, week_start_name=self.week_start)

    def default_spec(self) -> RangeSpec:
        """Range used when persisted UI state is missing or malformed."""
        return deserialize(self.default_range)

    def fallback_padding(self) -> timedelta:
        return timedelta(days=self.fallback_padding_days)

    def live_refetch(self) -> timedelta:
        return timedelta(seconds=self.live_refetch_seconds)

    def stale(self) -> timedelta:
        return timedelta(seconds=self.stale_seconds)


def load_time_ranges_config(
    *,
    environ: Mapping[str, str],
) -> TimeRangesConfig:
    """
    Load time ranges engine config from YAML and env overrides.

    Args:
        environ: Environment mapping used to resolve env and override values.
    Returns:
        TimeRangesConfig: Validated runtime settings.
    Assumptions:
        Optional `time_ranges` section lives in the YAML file.
    Raises:
        FileNotFoundError: If the YAML path does not exist.
        ValueError: If YAML or environment values are invalid.
    Side Effects:
        Reads one YAML file from disk.
    """
    config_path = _resolve_config_path(environ=environ)
    payload = _load_optional_section(path=config_path)

    return TimeRangesConfig(
        timezone=_resolve_str_setting(
            environ=environ,
            env_keys=_TIMEZONE_ENV_KEYS,
            payload=payload,
            payload_key="timezone",
            default=_DEFAULT_TIMEZONE,
        ),
        week_start=_resolve_str_setting(
            environ=environ,
            env_keys=_WEEK_START_ENV_KEYS,
            payload=payload,
            payload_key="week_start",
            default=_DEFAULT_WEEK_START,
        ),
        default_range=_resolve_str_setting(
            environ=environ,
            env_keys=_DEFAULT_RANGE_ENV_KEYS,
            payload=payload,
            payload_key="default_range",
            default=_DEFAULT_RANGE_TOKEN,
        ),
        fallback_padding_days=_resolve_int_setting(
            environ=environ,
            env_keys=_PADDING_ENV_KEYS,
            payload=payload,
            payload_key="fallback_padding_days",
            default=_DEFAULT_FALLBACK_PADDING_DAYS,
            minimum=0,
        ),
        max_data_points=_resolve_int_setting(
            environ=environ,
            env_keys=_MAX_POINTS_ENV_KEYS,
            payload=payload,
            payload_key="max_data_points",
            default=_DEFAULT_MAX_DATA_POINTS,
        ),
        live_refetch_seconds=_resolve_int_setting(
            environ=environ,
            env_keys=_REFETCH_ENV_KEYS,
            payload=payload,
            payload_key="live_refetch_seconds",
            default=_DEFAULT_LIVE_REFETCH_SECONDS,
        ),
        stale_seconds=_resolve_int_setting(
            environ=environ,
            env_keys=_STALE_ENV_KEYS,
            payload=payload,
            payload_key="stale_seconds",
            default=_DEFAULT_STALE_SECONDS,
        ),
    )


def _resolve_config_path(*, environ: Mapping[str, str]) -> Path:
    """
    Resolve YAML path using explicit override or `DASHBOARD_ENV`.

    Args:
        environ: Environment mapping.
    Returns:
        Path: Time ranges YAML path.
    Assumptions:
        `DASHBOARD_TIME_RANGES_CONFIG` has priority over env-derived path.
    Raises:
        ValueError: If env value is invalid.
    Side Effects:
        None.
    """
    override = environ.get(_CONFIG_PATH_KEY, "").strip()
    if override:
        return Path(override)

    raw_env = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if raw_env not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {raw_env!r}"
        )
    return Path("configs") / raw_env / "time_ranges.yaml"


def _load_optional_section(*, path: Path) -> Mapping[str, Any]:
    """
    Load optional `time_ranges` mapping from YAML.

    Args:
        path: Config path.
    Returns:
        Mapping[str, Any]: `time_ranges` mapping, or empty mapping.
    Assumptions:
        Unknown keys are ignored by this loader.
    Raises:
        FileNotFoundError: If YAML path does not exist.
        ValueError: If YAML structure is invalid.
    Side Effects:
        Reads one UTF-8 file from disk.
    """
    if not path.exists():
        raise FileNotFoundError(f"time ranges config not found: {path}")
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("time ranges config must be a mapping at top-level")

    section = raw.get(_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"{_SECTION} section must be a mapping")
    return section


def _resolve_str_setting(
    *,
    environ: Mapping[str, str],
    env_keys: tuple[str, ...],
    payload: Mapping[str, Any],
    payload_key: str,
    default: str,
) -> str:
    """Resolve non-empty string setting from env -> payload -> default precedence."""
    for env_key in env_keys:
        raw = environ.get(env_key, "").strip()
        if raw:
            return raw

    payload_value = payload.get(payload_key)
    if payload_value is None:
        return default
    if not isinstance(payload_value, str):
        raise ValueError(
            f"expected string for {_SECTION}.{payload_key}, "
            f"got {type(payload_value).__name__}"
        )
    normalized = payload_value.strip()
    if not normalized:
        raise ValueError(f"{_SECTION}.{payload_key} must be non-empty")
    return normalized


def _resolve_int_setting(
    *,
    environ: Mapping[str, str],
    env_keys: tuple[str, ...],
    payload: Mapping[str, Any],
    payload_key: str,
    default: int,
    minimum: int = 1,
) -> int:
    """
    Resolve integer setting from env -> payload -> default precedence.

    Args:
        environ: Environment mapping.
        env_keys: Candidate env variable names by priority.
        payload: Parsed YAML subsection.
        payload_key: YAML key name.
        default: Fallback default value.
        minimum: Smallest accepted value.
    Returns:
        int: Resolved integer value.
    Assumptions:
        String env values use base-10 integer format.
    Raises:
        ValueError: If provided value cannot be parsed or is below `minimum`.
    Side Effects:
        None.
    """
    for env_key in env_keys:
        raw = environ.get(env_key, "").strip()
        if raw:
            return _parse_int(raw, key=env_key, minimum=minimum)

    payload_value = payload.get(payload_key)
    if payload_value is None:
        return default

    if isinstance(payload_value, bool) or not isinstance(payload_value, int):
        raise ValueError(
            f"expected int for {_SECTION}.{payload_key}, "
            f"got {type(payload_value).__name__}"
        )
    if payload_value < minimum:
        raise ValueError(
            f"{_SECTION}.{payload_key} must be >= {minimum}, got {payload_value}"
        )
    return payload_value


def _parse_int(raw: str, *, key: str, minimum: int) -> int:
    try:
        parsed = int(raw, 10)
    except ValueError as error:
        raise ValueError(f"{key} must be int, got {raw!r}") from error
    if parsed < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {parsed}")
    return parsed


__all__ = [
    "TimeRangesConfig",
    "load_time_ranges_config",
]
