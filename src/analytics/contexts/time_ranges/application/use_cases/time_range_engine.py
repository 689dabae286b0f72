from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Sequence

from analytics.contexts.time_ranges.application.ports import Clock
from analytics.contexts.time_ranges.application.services import (
    DEFAULT_FALLBACK_PADDING,
    DEFAULT_RANGE,
    RefreshPolicy,
    axis_style,
    bucket_count_of,
    buckets_of,
    deserialize_or_default,
    ends_today,
    granularity_of,
    next_range,
    previous_range,
    refresh_policy,
    resolve,
    serialize,
    summary_label,
    to_data_points,
    tooltip_style,
)
from analytics.contexts.time_ranges.application.services.refresh_policy import (
    DEFAULT_LIVE_REFETCH,
    DEFAULT_STALE,
)
from analytics.contexts.time_ranges.domain import (
    DEFAULT_CALENDAR,
    Bucket,
    CalendarSettings,
    DataPoint,
    Granularity,
    LabelStyle,
    Metric,
    RangeSpec,
)
from analytics.shared_kernel.primitives import TimeRange, UtcTimestamp

if TYPE_CHECKING:
    from analytics.platform.config import TimeRangesConfig

# Largest bucket count the external query layer answers.
DEFAULT_MAX_DATA_POINTS = 100


@dataclass(frozen=True, slots=True)
class RangeEvaluation:
    """
    Immutable snapshot of one evaluation pass over a range spec.

    Every derived value is computed from the same `now`, so the stats query and the graph
    query built from one evaluation always agree on interval, granularity and bucket count.

    Related:
      - src/analytics/contexts/time_ranges/adapters/outbound/query/range_query.py
    """

    spec: RangeSpec
    now: UtcTimestamp
    interval: TimeRange
    granularity: Granularity
    bucket_count: int
    buckets: tuple[Bucket, ...]
    axis_style: LabelStyle
    tooltip_style: LabelStyle
    summary: str
    ends_today: bool
    refresh: RefreshPolicy
    max_data_points: int = DEFAULT_MAX_DATA_POINTS


class TimeRangeEngine:
    """
    Facade over resolver, navigator, serializer, bucketizer and formatter.

    Reads the injected clock once per public call and threads that single `now` through
    every collaborator.

    Docs:
      - docs/architecture/time-ranges/time-range-engine-v1.md
    Related:
      - src/analytics/contexts/time_ranges/application/services/resolver.py
      - src/analytics/contexts/time_ranges/application/services/navigator.py
      - src/analytics/platform/config/time_ranges_config.py
    """

    def __init__(
        self,
        *,
        clock: Clock,
        cal: CalendarSettings = DEFAULT_CALENDAR,
        default_range: RangeSpec = DEFAULT_RANGE,
        fallback_padding: timedelta = DEFAULT_FALLBACK_PADDING,
        live_refetch: timedelta = DEFAULT_LIVE_REFETCH,
        stale: timedelta = DEFAULT_STALE,
        max_data_points: int = DEFAULT_MAX_DATA_POINTS,
    ) -> None:
        if max_data_points <= 0:
            raise ValueError(f"max_data_points must be > 0, got {max_data_points}")
        self._clock = clock
        self._cal = cal
        self._default_range = default_range
        self._fallback_padding = fallback_padding
        self._live_refetch = live_refetch
        self._stale = stale
        self._max_data_points = max_data_points

    @classmethod
    def from_config(cls, config: TimeRangesConfig, *, clock: Clock) -> TimeRangeEngine:
        """Wire an engine from loaded runtime config."""
        return cls(
            clock=clock,
            cal=config.calendar(),
            default_range=config.default_spec(),
            fallback_padding=config.fallback_padding(),
            live_refetch=config.live_refetch(),
            stale=config.stale(),
            max_data_points=config.max_data_points,
        )

    @property
    def calendar(self) -> CalendarSettings:
        return self._cal

    @property
    def max_data_points(self) -> int:
        return self._max_data_points

    def evaluate(self, spec: RangeSpec) -> RangeEvaluation:
        return self.evaluate_at(spec, self._clock.now())

    def evaluate_at(self, spec: RangeSpec, now: UtcTimestamp) -> RangeEvaluation:
        """
        Resolve a spec and derive everything the query and rendering layers need.

        Args:
            spec: Range selected by the user.
            now: Evaluation instant.
        Returns:
            RangeEvaluation: Snapshot with interval, granularity, buckets and labels.
        Assumptions:
            Granularity is computed exactly once and reused for bucket count and buckets.
        Raises:
            CalendarArithmeticError: Only for instants near the datetime limits.
        Side Effects:
            None.
        """
        interval = resolve(spec, now, cal=self._cal)
        granularity = granularity_of(interval)
        buckets = buckets_of(interval, granularity, cal=self._cal)
        return RangeEvaluation(
            spec=spec,
            now=now,
            interval=interval,
            granularity=granularity,
            bucket_count=bucket_count_of(interval, granularity, cal=self._cal),
            buckets=buckets,
            axis_style=axis_style(interval),
            tooltip_style=tooltip_style(interval),
            summary=summary_label(spec, now=now, cal=self._cal),
            ends_today=ends_today(spec, now, cal=self._cal),
            refresh=refresh_policy(spec, live_refetch=self._live_refetch, stale=self._stale),
            max_data_points=self._max_data_points,
        )

    def to_data_points(
        self,
        series: Sequence[float],
        evaluation: RangeEvaluation,
        metric: Metric,
    ) -> tuple[DataPoint, ...]:
        """Bucketize a query result with the evaluation's own `now` and granularity."""
        return to_data_points(
            series,
            evaluation.interval,
            metric.scale,
            now=evaluation.now,
            granularity=evaluation.granularity,
            cal=self._cal,
        )

    def previous(self, spec: RangeSpec) -> RangeSpec:
        return previous_range(
            spec,
            self._clock.now(),
            cal=self._cal,
            fallback_padding=self._fallback_padding,
        )

    def next(self, spec: RangeSpec) -> RangeSpec:
        return next_range(
            spec,
            self._clock.now(),
            cal=self._cal,
            fallback_padding=self._fallback_padding,
        )

    def encode(self, spec: RangeSpec) -> str:
        return serialize(spec)

    def decode(self, token: str | None) -> RangeSpec:
        """Decode persisted UI state, substituting the configured default range."""
        return deserialize_or_default(token, default=self._default_range)
