"""
Pydantic request models for the external stats/graph query layer.

Docs:
  - docs/architecture/time-ranges/time-range-engine-v1.md
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from analytics.contexts.time_ranges.application.use_cases import (
    DEFAULT_MAX_DATA_POINTS,
    RangeEvaluation,
    validation_error,
)
from analytics.contexts.time_ranges.domain import Metric
from analytics.platform.errors import DashboardError

_MAX_DATA_POINTS_CONTEXT_KEY = "max_data_points"


class DateRangePayload(BaseModel):
    """
    Wire form of a resolved interval: epoch-millisecond `[start, end)` bounds.

    Related:
      - src/analytics/shared_kernel/primitives/time_range.py
      - src/analytics/contexts/time_ranges/application/use_cases/time_range_engine.py
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def check_order(self) -> DateRangePayload:
        if self.end < self.start:
            raise ValueError(f"range end {self.end} precedes start {self.start}")
        return self


class StatsQueryRequest(BaseModel):
    """Request body for the per-range aggregate stats query."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    range: DateRangePayload


class GraphQueryRequest(BaseModel):
    """
    Request body for the per-bucket graph query.

    `dataPoints` is the bucket count of the same evaluation the stats query was built from;
    the upper bound comes from validation context (`max_data_points`).
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    range: DateRangePayload
    metric: Metric
    data_points: int = Field(alias="dataPoints", ge=1)

    @field_validator("data_points")
    @classmethod
    def check_max_data_points(cls, value: int, info: ValidationInfo) -> int:
        context = info.context or {}
        limit = int(context.get(_MAX_DATA_POINTS_CONTEXT_KEY, DEFAULT_MAX_DATA_POINTS))
        if value > limit:
            raise ValueError(f"dataPoints must be <= {limit}, got {value}")
        return value


def build_stats_query(evaluation: RangeEvaluation) -> StatsQueryRequest:
    """
    Build the stats request for one evaluation.

    Args:
        evaluation: Engine evaluation snapshot.
    Returns:
        StatsQueryRequest: Validated request model.
    Assumptions:
        Interval bounds are already ordered by `TimeRange`.
    Raises:
        DashboardError: `validation_error` if the payload is rejected.
    Side Effects:
        None.
    """
    payload = {"range": _range_payload(evaluation)}
    try:
        return StatsQueryRequest.model_validate(payload)
    except ValidationError as error:
        raise _to_dashboard_error(error, message="Stats query payload is invalid") from error


def build_graph_query(
    evaluation: RangeEvaluation,
    metric: Metric,
    *,
    max_data_points: int | None = None,
) -> GraphQueryRequest:
    """
    Build the graph request for one evaluation and metric.

    Args:
        evaluation: Engine evaluation snapshot; shares interval and bucket count with the
            stats request built from it.
        metric: Graphed metric.
        max_data_points: Largest bucket count the query layer accepts; defaults to the
            limit the evaluating engine was configured with.
    Returns:
        GraphQueryRequest: Validated request model.
    Assumptions:
        The query layer returns exactly `dataPoints` values per request.
    Raises:
        DashboardError: `validation_error` for empty ranges or too many buckets.
    Side Effects:
        None.
    """
    limit = evaluation.max_data_points if max_data_points is None else max_data_points
    payload = {
        "range": _range_payload(evaluation),
        "metric": metric.value,
        "dataPoints": evaluation.bucket_count,
    }
    try:
        return GraphQueryRequest.model_validate(
            payload,
            context={_MAX_DATA_POINTS_CONTEXT_KEY: limit},
        )
    except ValidationError as error:
        raise _to_dashboard_error(error, message="Graph query payload is invalid") from error


def _range_payload(evaluation: RangeEvaluation) -> dict[str, int]:
    return {
        "start": evaluation.interval.start.epoch_ms(),
        "end": evaluation.interval.end.epoch_ms(),
    }


def _to_dashboard_error(error: ValidationError, *, message: str) -> DashboardError:
    items: list[dict[str, Any]] = []
    for item in error.errors():
        items.append(
            {
                "path": ".".join(str(part) for part in item.get("loc", ())) or "body",
                "code": str(item.get("type", "validation_error")),
                "message": str(item.get("msg", "Validation error")),
            }
        )
    return validation_error(message=message, errors=items)
