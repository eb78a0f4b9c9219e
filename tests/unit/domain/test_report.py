"""Tests for the run report."""

from __future__ import annotations

import json

from attune.domain.report import (
    EventStatus,
    PropertyOutcome,
    PropertyStatus,
    ResourceStatus,
    RunReport,
)

from tests.helpers.time_asserts import assert_iso_utc, assert_strict_utc


def _status(ref: str, *outcomes: PropertyOutcome) -> ResourceStatus:
    return ResourceStatus(
        resource=ref, resource_type="file", title=ref[5:-1], outcomes=list(outcomes)
    )


CHANGED = PropertyOutcome(
    "mode", PropertyStatus.CHANGED, "600", "644", "inode_changed", "mode changed"
)
FAILED = PropertyOutcome("owner", PropertyStatus.FAILED, message="boom")
IN_SYNC = PropertyOutcome("mode", PropertyStatus.IN_SYNC, "644", "644")


def test_new_report_is_unchanged():
    report = RunReport(host="web01", run_id="r1")
    assert report.status == "unchanged"
    assert report.events == []
    assert_strict_utc(report.time)


def test_status_reflects_worst_outcome():
    report = RunReport(host="web01", run_id="r1")
    report.add_resource_status(_status("File[/a]", IN_SYNC))
    assert report.status == "unchanged"
    report.add_resource_status(_status("File[/b]", CHANGED))
    assert report.status == "changed"
    report.add_resource_status(_status("File[/c]", FAILED))
    assert report.status == "failed"


def test_resource_status_flags():
    status = _status("File[/a]", CHANGED, FAILED)
    assert status.changed and status.failed and status.out_of_sync
    assert status.change_count == 1
    assert not _status("File[/b]", IN_SYNC).out_of_sync


def test_events_skip_in_sync_properties():
    report = RunReport(host="web01", run_id="r1")
    report.add_resource_status(_status("File[/a]", IN_SYNC, CHANGED, FAILED))
    events = report.events
    assert [(e.property, e.name, e.status) for e in events] == [
        ("mode", "inode_changed", EventStatus.SUCCESS),
        ("owner", "owner_failed", EventStatus.FAILURE),
    ]
    assert events[0].previous == "600"
    assert events[0].desired == "644"


def test_metrics_merge():
    report = RunReport(host="web01", run_id="r1")
    report.add_metric("time", {"file": 0.5})
    report.add_metric("time", {"total": 1.5})
    assert report.metrics == {"time": {"file": 0.5, "total": 1.5}}


def test_summary_is_aligned_with_total_last():
    report = RunReport(host="web01", run_id="r1")
    report.add_metric("resources", {"total": 3, "changed": 1, "out_of_sync": 2})
    report.add_metric("time", {"file": 0.25, "config_retrieval": 1.0, "total": 1.25})
    assert report.summary() == "\n".join(
        [
            "Resources:",
            "       Changed: 1",
            "   Out of sync: 2",
            "         Total: 3",
            "Time:",
            "   Config retrieval: 1",
            "               File: 0.25",
            "              Total: 1.25",
        ]
    )


def test_to_dict_is_json_serializable():
    report = RunReport(host="web01", run_id="r1", configuration_version=42)
    report.add_resource_status(_status("File[/a]", CHANGED))
    report.add_metric("changes", {"total": 1})

    data = json.loads(json.dumps(report.to_dict()))

    assert data["status"] == "changed"
    assert data["configuration_version"] == 42
    assert_iso_utc(data["time"])
    resource = data["resource_statuses"]["File[/a]"]
    assert resource["changed"] is True
    assert resource["events"][0]["status"] == "success"
