from .range_query import (
    DEFAULT_MAX_DATA_POINTS,
    DateRangePayload,
    GraphQueryRequest,
    StatsQueryRequest,
    build_graph_query,
    build_stats_query,
)

__all__ = [
    "DEFAULT_MAX_DATA_POINTS",
    "DateRangePayload",
    "GraphQueryRequest",
    "StatsQueryRequest",
    "build_graph_query",
    "build_stats_query",
]
