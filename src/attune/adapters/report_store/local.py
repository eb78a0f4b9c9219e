"""Report store that writes one JSON file per run."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from attune.adapters.atomic import write_text_atomic
from attune.interfaces.report_store import ReportStore

if TYPE_CHECKING:
    from attune.domain.report import RunReport

logger = logging.getLogger(__name__)


class LocalReportStore(ReportStore):
    """Persist reports as ``<root>/<host>/<YYYYmmddHHMMSS>-<run_id>.json``."""

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)

    def path_for(self, report: RunReport) -> Path:
        """Return the file a report is written to."""
        stamp = report.time.strftime("%Y%m%d%H%M%S")
        return self.root / report.host / f"{stamp}-{report.run_id}.json"

    def save(self, report: RunReport) -> None:
        path = write_text_atomic(
            self.path_for(report), json.dumps(report.to_dict(), indent=2)
        )
        logger.debug("Wrote report %s to %s", report.run_id, path)
