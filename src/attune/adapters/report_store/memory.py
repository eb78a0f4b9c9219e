"""In-memory report store for tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from attune.interfaces.report_store import ReportStore

if TYPE_CHECKING:
    from attune.domain.report import RunReport


class InMemoryReportStore(ReportStore):
    """ReportStore implementation that appends reports to a list.

    Set `error` to make `save` fail.
    """

    def __init__(self, error: Exception | None = None) -> None:
        self.reports: list[RunReport] = []
        self.error = error

    def save(self, report: RunReport) -> None:
        if self.error is not None:
            raise self.error
        self.reports.append(report)
