from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from analytics.contexts.time_ranges.application.use_cases import BuildAllTimeRange, all_time_range
from analytics.contexts.time_ranges.domain import RangeVariant
from analytics.shared_kernel.primitives import UtcTimestamp

NOW = UtcTimestamp(datetime(2024, 11, 15, 14, 30, tzinfo=timezone.utc))


class _FixedClock:
    def now(self) -> UtcTimestamp:
        return NOW


class _InMemoryEarliestEventReader:
    def __init__(self, earliest: dict[str, UtcTimestamp]) -> None:
        self._earliest = earliest
        self.calls: list[str] = []

    def earliest(self, *, project_id: str) -> UtcTimestamp | None:
        self.calls.append(project_id)
        return self._earliest.get(project_id)


def test_all_time_range_spans_earliest_event_to_now() -> None:
    earliest = UtcTimestamp(datetime(2022, 3, 4, 5, 6, tzinfo=timezone.utc))

    spec = all_time_range(earliest=earliest, now=NOW)

    assert (spec.start, spec.end) == (earliest, NOW)
    assert spec.is_all_time


def test_all_time_range_without_events_collapses_to_now() -> None:
    spec = all_time_range(earliest=None, now=NOW)

    assert spec.start == spec.end == NOW
    assert spec.variant is RangeVariant.ALL_TIME


def test_all_time_range_clamps_future_earliest_event() -> None:
    future = UtcTimestamp(datetime(2025, 1, 1, tzinfo=timezone.utc))

    assert all_time_range(earliest=future, now=NOW).start == NOW


def test_build_all_time_range_reads_port_and_logs_missing_events(caplog: pytest.LogCaptureFixture) -> None:
    earliest = UtcTimestamp(datetime(2023, 1, 1, tzinfo=timezone.utc))
    reader = _InMemoryEarliestEventReader({"blog": earliest})
    use_case = BuildAllTimeRange(reader=reader, clock=_FixedClock())

    with caplog.at_level(logging.INFO):
        known = use_case.execute(project_id="blog")
        unknown = use_case.execute(project_id="shop")

    assert reader.calls == ["blog", "shop"]
    assert known.start == earliest
    assert unknown.start == unknown.end == NOW
    assert "all-time range without events: project_id=shop" in caplog.text
    assert "project_id=blog" not in caplog.text
