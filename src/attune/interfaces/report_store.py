"""Report sink port."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from attune.domain.report import RunReport

# pylint: disable=too-few-public-methods


class ReportStore(abc.ABC):
    """Contract for persisting run reports."""

    @abc.abstractmethod
    def save(self, report: RunReport) -> None:
        """Persist `report`.

        Raises:
            OSError: If the report cannot be written.
        """
