"""Fixtures for report store contract tests."""

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from attune.adapters.report_store import InMemoryReportStore, LocalReportStore
from attune.interfaces.report_store import ReportStore


@pytest.fixture(params=["memory", "local"])
def report_store(
    request: pytest.FixtureRequest, tmp_path: Path
) -> Iterable[tuple[ReportStore, Callable[[], int]]]:
    """Yield a report store and a function counting the reports it holds.

    Supported params:
      - `"memory"` → InMemoryReportStore
      - `"local"` → LocalReportStore under `tmp_path`
    """
    match request.param:
        case "memory":
            store = InMemoryReportStore()
            yield store, lambda: len(store.reports)
        case "local":
            root = tmp_path / "reports"
            yield LocalReportStore(root), lambda: len(list(root.rglob("*.json")))
        case _:
            raise ValueError(f"unknown report store type: {request.param}")
