"""Unit tests for ``attune run --detailed-exitcodes``."""

import pytest

from attune.domain.report import (
    PropertyOutcome,
    PropertyStatus,
    ResourceStatus,
    RunReport,
)
from attune.entrypoints.cli.run import detailed_exit_code


def _report(*statuses: PropertyStatus) -> RunReport:
    report = RunReport(host="web01", run_id="r1")
    for index, status in enumerate(statuses):
        report.add_resource_status(
            ResourceStatus(
                resource=f"File[/f{index}]",
                resource_type="file",
                title=f"/f{index}",
                outcomes=[PropertyOutcome("mode", status)],
            )
        )
    return report


@pytest.mark.parametrize(
    ("statuses", "expected"),
    [
        ((), 0),
        ((PropertyStatus.IN_SYNC,), 0),
        ((PropertyStatus.NOOP,), 0),
        ((PropertyStatus.CHANGED,), 4),
        ((PropertyStatus.FAILED,), 2),
        ((PropertyStatus.CHANGED, PropertyStatus.FAILED), 6),
    ],
)
def test_detailed_exit_code(statuses, expected):
    assert detailed_exit_code(_report(*statuses)) == expected
