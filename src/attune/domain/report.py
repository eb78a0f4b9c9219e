"""Run report: what a cycle changed, what failed, and how long it took.

The report is assembled in memory while resources are applied and handed to
a `ReportStore` once the cycle is over. Nothing here performs I/O.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

# pylint: disable=too-many-instance-attributes


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class PropertyStatus(Enum):
    """Outcome of reconciling one property."""

    IN_SYNC = "in_sync"
    CHANGED = "changed"
    NOOP = "noop"
    FAILED = "failed"


class EventStatus(Enum):
    """Status attached to a reported event."""

    SUCCESS = "success"
    FAILURE = "failure"
    NOOP = "noop"


_EVENT_STATUS = {
    PropertyStatus.CHANGED: EventStatus.SUCCESS,
    PropertyStatus.FAILED: EventStatus.FAILURE,
    PropertyStatus.NOOP: EventStatus.NOOP,
}


@dataclass(frozen=True)
class Event:
    """A change notification (or failed attempt) for one property."""

    resource: str
    property: str
    name: str
    status: EventStatus
    previous: str | None
    desired: str | None
    message: str
    time: datetime.datetime = field(default_factory=_utcnow)


@dataclass
class PropertyOutcome:
    """Result of running the reconciliation cycle on one property."""

    name: str
    status: PropertyStatus
    previous: str | None = None
    desired: str | None = None
    event: str | None = None
    message: str = ""
    duration: float = 0.0


@dataclass
class ResourceStatus:
    """Aggregated outcome for one resource."""

    resource: str
    resource_type: str
    title: str
    outcomes: list[PropertyOutcome] = field(default_factory=list)
    evaluation_time: float = 0.0
    time: datetime.datetime = field(default_factory=_utcnow)

    @property
    def changed(self) -> bool:
        """True if at least one property was changed."""
        return any(o.status is PropertyStatus.CHANGED for o in self.outcomes)

    @property
    def failed(self) -> bool:
        """True if at least one property failed."""
        return any(o.status is PropertyStatus.FAILED for o in self.outcomes)

    @property
    def out_of_sync(self) -> bool:
        """True if at least one property was found out of sync."""
        return any(o.status is not PropertyStatus.IN_SYNC for o in self.outcomes)

    @property
    def change_count(self) -> int:
        """Number of properties changed."""
        return sum(o.status is PropertyStatus.CHANGED for o in self.outcomes)

    @property
    def events(self) -> list[Event]:
        """Events for every property that was not already in sync."""
        return [
            Event(
                resource=self.resource,
                property=o.name,
                name=o.event or f"{o.name}_{o.status.value}",
                status=_EVENT_STATUS[o.status],
                previous=o.previous,
                desired=o.desired,
                message=o.message,
                time=self.time,
            )
            for o in self.outcomes
            if o.status is not PropertyStatus.IN_SYNC
        ]


@dataclass(frozen=True)
class LogEntry:
    """A log record captured while the report's log sink was attached."""

    level: str
    source: str
    message: str
    time: datetime.datetime


@dataclass
class RunReport:
    """Structured summary of one cycle."""

    host: str
    run_id: str
    time: datetime.datetime = field(default_factory=_utcnow)
    configuration_version: int | None = None
    resource_statuses: dict[str, ResourceStatus] = field(default_factory=dict)
    logs: list[LogEntry] = field(default_factory=list)
    metrics: dict[str, dict[str, float]] = field(default_factory=dict)

    # --- Accumulation ---

    def add_resource_status(self, status: ResourceStatus) -> None:
        """Record the outcome of one resource."""
        self.resource_statuses[status.resource] = status

    def add_metric(self, category: str, values: Mapping[str, float]) -> None:
        """Merge named values into a metric category (e.g. ``"time"``)."""
        self.metrics.setdefault(category, {}).update(values)

    def add_log(self, entry: LogEntry) -> None:
        """Append a captured log entry."""
        self.logs.append(entry)

    # --- Views ---

    @property
    def events(self) -> list[Event]:
        """All events in the order resources were applied."""
        return [e for s in self.resource_statuses.values() for e in s.events]

    @property
    def status(self) -> str:
        """``failed`` if anything failed, ``changed`` if anything changed,
        otherwise ``unchanged``."""
        statuses = self.resource_statuses.values()
        if any(s.failed for s in statuses):
            return "failed"
        if any(s.changed for s in statuses):
            return "changed"
        return "unchanged"

    def summary(self) -> str:
        """Render the metrics as aligned, human-readable text."""
        lines: list[str] = []
        for category in sorted(self.metrics):
            values = self.metrics[category]
            labels = {key: key.replace("_", " ").capitalize() for key in values}
            width = max((len(label) for label in labels.values()), default=0)
            lines.append(f"{category.replace('_', ' ').capitalize()}:")
            # "total" goes last, like a sum line
            for key in sorted(values, key=lambda k: (k == "total", labels[k])):
                lines.append(f"   {labels[key]:>{width}}: {_format_number(values[key])}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the report."""
        return {
            "host": self.host,
            "run_id": self.run_id,
            "time": self.time.isoformat(),
            "configuration_version": self.configuration_version,
            "status": self.status,
            "metrics": self.metrics,
            "resource_statuses": {
                ref: _status_to_dict(status)
                for ref, status in self.resource_statuses.items()
            },
            "logs": [
                {**asdict(entry), "time": entry.time.isoformat()} for entry in self.logs
            ],
        }


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def _status_to_dict(status: ResourceStatus) -> dict[str, Any]:
    return {
        "resource_type": status.resource_type,
        "title": status.title,
        "time": status.time.isoformat(),
        "evaluation_time": status.evaluation_time,
        "changed": status.changed,
        "failed": status.failed,
        "out_of_sync": status.out_of_sync,
        "events": [
            {
                **asdict(event),
                "status": event.status.value,
                "time": event.time.isoformat(),
            }
            for event in status.events
        ],
    }
