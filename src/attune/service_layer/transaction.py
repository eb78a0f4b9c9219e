"""Apply a finalized catalog and turn the outcome into report metrics."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from attune.domain.report import EventStatus

from .applier import apply_resource

if TYPE_CHECKING:
    from attune.domain.catalog import Catalog
    from attune.domain.report import ResourceStatus, RunReport

logger = logging.getLogger(__name__)


class Transaction:
    """One pass over a catalog's resources, in catalog order.

    Statuses are kept as they are produced, so an exception escaping
    `evaluate` still leaves the resources applied so far on record.

    Args:
        catalog: The finalized catalog to apply.
        report: If given, each resource status is added to it as soon as the
            resource has been applied.
        trace: Log tracebacks for contained failures.
    """

    def __init__(
        self, catalog: Catalog, report: RunReport | None = None, trace: bool = False
    ) -> None:
        self.catalog = catalog
        self.report = report
        self.trace = trace
        self.total = len(catalog)
        self.resource_statuses: list[ResourceStatus] = []

    def evaluate(self) -> list[ResourceStatus]:
        """Apply every resource and return their statuses."""
        for resource in self.catalog:
            logger.debug("Applying %s", resource.ref)
            status = apply_resource(resource, trace=self.trace)
            self.resource_statuses.append(status)
            if self.report is not None:
                self.report.add_resource_status(status)
        return self.resource_statuses

    @property
    def skipped(self) -> int:
        """Resources that were never applied."""
        return self.total - len(self.resource_statuses)

    def add_metrics_to_report(self, report: RunReport) -> None:
        """Merge resource, change, event and time metrics into `report`."""
        statuses = self.resource_statuses
        report.add_metric(
            "resources",
            {
                "total": self.total,
                "changed": sum(s.changed for s in statuses),
                "failed": sum(s.failed for s in statuses),
                "out_of_sync": sum(s.out_of_sync for s in statuses),
                "skipped": self.skipped,
            },
        )
        report.add_metric(
            "changes", {"total": sum(s.change_count for s in statuses)}
        )

        events = [e for s in statuses for e in s.events]
        by_status = Counter(e.status for e in events)
        report.add_metric(
            "events",
            {
                "total": len(events),
                "success": by_status[EventStatus.SUCCESS],
                "failure": by_status[EventStatus.FAILURE],
                "noop": by_status[EventStatus.NOOP],
            },
        )

        times: dict[str, float] = {}
        for s in statuses:
            times[s.resource_type] = times.get(s.resource_type, 0.0) + s.evaluation_time
        if self.catalog.retrieval_duration is not None:
            times["config_retrieval"] = self.catalog.retrieval_duration
        times["total"] = sum(times.values())
        report.add_metric("time", times)
