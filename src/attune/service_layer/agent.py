"""The run orchestrator: one agent cycle from preparation to report.

A cycle moves through `RunPhase` values in order::

    IDLE -> PREPARING -> ACQUIRING -> APPLYING -> REPORTING -> IDLE

Reporting always happens, whatever happened before it: connections are
closed, the post-run hook runs, the report's log sink is detached, metrics
are merged and the report is printed and persisted as configured. The
catalog is then cleared.
"""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from attune.domain.errors import PROCESS_FATAL
from attune.domain.report import RunReport
from attune.interfaces.state_store import StateCorruptionError
from attune.logging import ReportLogHandler

from .hooks import HookFailure, execute_from_setting
from .transaction import Transaction

if TYPE_CHECKING:
    from attune.config import AgentSettings
    from attune.domain.catalog import Catalog
    from attune.interfaces.facts import FactPayload, FactSource
    from attune.interfaces.id_generator import IdGenerator
    from attune.interfaces.plugin_sync import PluginSync
    from attune.interfaces.report_store import ReportStore
    from attune.interfaces.state_store import StateStore

    from .acquisition import CatalogAcquisition

logger = logging.getLogger(__name__)

STATE_SECTION = "configuration"


class RunPhase(enum.Enum):
    """Where the agent is in its cycle."""

    IDLE = "idle"
    PREPARING = "preparing"
    ACQUIRING = "acquiring"
    APPLYING = "applying"
    REPORTING = "reporting"


class Agent:  # pylint: disable=too-many-instance-attributes
    """Runs agent cycles.

    Args:
        settings: Resolved agent settings.
        acquisition: Fetches and converts catalogs.
        state_store: Cross-cycle state (compile time, last run).
        report_store: Where reports are persisted.
        plugin_sync: Synchronizes plugins before each cycle.
        fact_source: Describes the node for catalog compilation.
        id_generator: Produces report run ids.
        run_hook: Runs a hook command; defaults to `execute_from_setting`.
        echo: Receives the report summary when ``summarize`` is set.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        settings: AgentSettings,
        *,
        acquisition: CatalogAcquisition,
        state_store: StateStore,
        report_store: ReportStore,
        plugin_sync: PluginSync,
        fact_source: FactSource,
        id_generator: IdGenerator,
        run_hook: Callable[[str, str], None] = execute_from_setting,
        echo: Callable[[str], object] = print,
    ) -> None:
        self.settings = settings
        self.acquisition = acquisition
        self.state_store = state_store
        self.report_store = report_store
        self.plugin_sync = plugin_sync
        self.fact_source = fact_source
        self.id_generator = id_generator
        self.run_hook = run_hook
        self.echo = echo

        self.phase = RunPhase.IDLE
        self.compile_time: int | None = None
        self.catalog: Catalog | None = None

    # --- Cycle ---

    def run(self, catalog: Catalog | None = None) -> RunReport:
        """Run one cycle.

        Args:
            catalog: Apply this catalog instead of acquiring one.

        Returns:
            RunReport: The report of the cycle, including skipped cycles.

        Raises:
            StateCorruptionError: If the state store is corrupt beyond repair.
                Reporting and cleanup have already happened.
            HookFailure: If the post-run hook failed. Reporting and cleanup
                have already happened.
        """
        report = RunReport(host=self.settings.certname, run_id=self.id_generator.new_id())
        sink = ReportLogHandler(report).attach()
        transaction: Transaction | None = None
        postrun_failure: HookFailure | None = None
        try:
            transaction = self._cycle(report, catalog)
        finally:
            postrun_failure = self._finish(report, transaction, sink)
        if postrun_failure is not None:
            raise postrun_failure
        return report

    def _cycle(self, report: RunReport, catalog: Catalog | None) -> Transaction | None:
        if catalog is not None:
            self.catalog = catalog
        self.phase = RunPhase.PREPARING
        try:
            self.prepare()
        except (*PROCESS_FATAL, StateCorruptionError):
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error("Failed to prepare catalog: %s", e, exc_info=self.settings.trace)

        self.phase = RunPhase.ACQUIRING
        if catalog is None:
            catalog = self.retrieve_catalog()
        if catalog is None:
            logger.error("Could not retrieve catalog; skipping run")
            return None
        self.catalog = catalog
        report.configuration_version = catalog.version

        self.phase = RunPhase.APPLYING
        transaction = Transaction(catalog, report, trace=self.settings.trace)
        started = time.perf_counter()
        try:
            transaction.evaluate()
        except PROCESS_FATAL:
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error("Failed to apply catalog: %s", e, exc_info=self.settings.trace)
            return transaction

        logger.info("Finished catalog run in %.2f seconds", time.perf_counter() - started)
        self._remember(catalog)
        return transaction

    # --- PREPARING ---

    def prepare(self) -> None:
        """Load state, synchronize plugins and run the pre-run hook.

        Raises:
            StateCorruptionError: If the state store cannot be loaded.
        """
        self.load_state()
        self.plugin_sync.download_plugins()
        self.plugin_sync.download_fact_plugins()
        self.run_hook("prerun_command", self.settings.prerun_command)

    def load_state(self) -> None:
        """Load the state store and pick up the last known compile time."""
        self.state_store.load()
        if self.compile_time is None:
            self.compile_time = self.state_store.cache(STATE_SECTION).get("compile_time")

    # --- ACQUIRING ---

    def retrieve_catalog(self) -> Catalog | None:
        """Acquire the catalog for this node; None when none is available."""
        return self.acquisition.fetch(self.settings.certname, self.facts_for_uploading())

    def facts_for_uploading(self) -> FactPayload | None:
        """Collect facts, or None if they cannot be collected."""
        try:
            return self.fact_source.facts_for_uploading()
        except PROCESS_FATAL:
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error("Could not collect facts: %s", e, exc_info=self.settings.trace)
            return None

    def _remember(self, catalog: Catalog) -> None:
        if catalog.version is not None:
            self.compile_time = catalog.version
        state = self.state_store.cache(STATE_SECTION)
        state["compile_time"] = self.compile_time
        state["last_run"] = int(time.time())
        try:
            self.state_store.save()
        except PROCESS_FATAL:
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error("Could not save state: %s", e, exc_info=self.settings.trace)

    # --- REPORTING ---

    def _finish(
        self,
        report: RunReport,
        transaction: Transaction | None,
        sink: ReportLogHandler,
    ) -> HookFailure | None:
        self.phase = RunPhase.REPORTING
        postrun_failure = None
        try:
            try:
                self.acquisition.close()
            except PROCESS_FATAL:
                raise
            except Exception as e:  # pylint: disable=broad-except
                logger.warning("Could not close connections: %s", e)

            try:
                self.run_hook("postrun_command", self.settings.postrun_command)
            except HookFailure as e:
                logger.error("%s", e)
                postrun_failure = e

            sink.detach()
            self.send_report(report, transaction)
        finally:
            sink.detach()
            self.clear()
            self.phase = RunPhase.IDLE
        return postrun_failure

    def send_report(self, report: RunReport, transaction: Transaction | None) -> None:
        """Merge metrics, then print and persist `report` as configured.

        Failures are logged, never raised.
        """
        try:
            if transaction is not None:
                transaction.add_metrics_to_report(report)
            if self.settings.summarize:
                self.echo(report.summary())
            if self.settings.report:
                self.report_store.save(report)
        except PROCESS_FATAL:
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error("Could not send report: %s", e, exc_info=self.settings.trace)

    def clear(self) -> None:
        """Drop the catalog of the finished cycle."""
        if self.catalog is not None:
            self.catalog.clear()
        self.catalog = None
