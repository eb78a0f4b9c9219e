"""Apply one resource: run every property through retrieve, compare, sync.

Failures are contained per property. A property that raises is recorded as
failed and the remaining properties of the resource still run.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from attune.domain.errors import PROCESS_FATAL
from attune.domain.report import PropertyOutcome, PropertyStatus, ResourceStatus
from attune.domain.values import NOT_APPLICABLE

if TYPE_CHECKING:
    from attune.domain.properties import Property
    from attune.domain.resources import Resource

logger = logging.getLogger(__name__)


def apply_resource(resource: Resource, trace: bool = False) -> ResourceStatus:
    """Converge every managed property of `resource`, in declaration order.

    Args:
        resource: The resource to apply.
        trace: Log tracebacks for contained failures.

    Returns:
        ResourceStatus: One outcome per property.
    """
    status = ResourceStatus(
        resource=resource.ref, resource_type=resource.type, title=resource.title
    )
    started = time.perf_counter()
    for prop in resource.properties:
        status.outcomes.append(apply_property(prop, trace=trace))
    status.evaluation_time = time.perf_counter() - started
    return status


def apply_property(prop: Property, trace: bool = False) -> PropertyOutcome:
    """Run the reconciliation cycle for one property and describe the result."""
    started = time.perf_counter()
    outcome = PropertyOutcome(name=prop.name, status=PropertyStatus.NOOP)
    try:
        prop.retrieve()
        outcome.previous = prop.display(prop.is_)
        outcome.desired = _display_desired(prop)
        if prop.in_sync():
            outcome.status = PropertyStatus.IN_SYNC
        elif (event := prop.sync()) is not None:
            outcome.status = PropertyStatus.CHANGED
            outcome.event = event
            outcome.message = (
                f"{prop.name} changed '{outcome.previous}' to '{outcome.desired}'"
            )
            logger.info("%s: %s", prop.label, outcome.message)
        else:
            outcome.message = f"{prop.name} left unchanged"
    except PROCESS_FATAL:
        raise
    except Exception as e:  # pylint: disable=broad-except
        outcome.status = PropertyStatus.FAILED
        outcome.message = str(e)
        logger.error("%s: %s", prop.label, e, exc_info=trace)
    outcome.duration = time.perf_counter() - started
    return outcome


def _display_desired(prop: Property) -> str:
    should = prop.should
    if should is NOT_APPLICABLE:
        return prop.display(should)
    return ",".join(prop.display(value) for value in should.values)
