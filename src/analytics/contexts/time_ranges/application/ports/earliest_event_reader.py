from __future__ import annotations

from typing import Protocol

from analytics.shared_kernel.primitives import UtcTimestamp


class EarliestEventReader(Protocol):
    """
    EarliestEventReader: port to the external "earliest recorded event" lookup.

    Docs:
      - docs/architecture/time-ranges/time-range-engine-v1.md
    Related:
      - src/analytics/contexts/time_ranges/application/use_cases/build_all_time_range.py
    """

    def earliest(self, *, project_id: str) -> UtcTimestamp | None:
        """
        Return the timestamp of the first event recorded for a project.

        Args:
            project_id: Opaque project identifier owned by the persistence layer.
        Returns:
            UtcTimestamp | None: Earliest event instant, or `None` if nothing was recorded yet.
        Assumptions:
            Implementations perform I/O; the engine itself does not.
        Raises:
            None.
        Side Effects:
            Implementation-defined read from event storage.
        """
        ...
