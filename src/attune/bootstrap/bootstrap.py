"""Build the agent and its collaborators from settings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from attune.adapters.catalog import (
    CachingCatalogTransport,
    HttpCatalogTransport,
    InMemoryCatalogTransport,
    LocalCatalogCache,
)
from attune.adapters.class_file import LocalClassFile
from attune.adapters.facts import SystemFactSource
from attune.adapters.filesystem.local import LocalFileSystem
from attune.adapters.id_generators import ULIDGenerator
from attune.adapters.plugin_sync import DirectoryPluginSync, NullPluginSync
from attune.adapters.report_store import LocalReportStore
from attune.adapters.state_store import SqlAlchemyStateStore
from attune.adapters.user_directory.posix import PosixUserDirectory
from attune.domain.notices import NoticeLedger
from attune.domain.properties import ReconcileContext
from attune.domain.resources import DEFAULT_REGISTRY
from attune.service_layer.acquisition import CatalogAcquisition
from attune.service_layer.agent import Agent

if TYPE_CHECKING:
    from attune.config import AgentSettings
    from attune.domain.resources import ResourceTypeRegistry
    from attune.interfaces.catalog import CatalogTransport
    from attune.interfaces.plugin_sync import PluginSync


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants."""

    agent: Agent
    acquisition: CatalogAcquisition
    context: ReconcileContext


def build_transport(settings: AgentSettings) -> CatalogTransport:
    """Remote transport with a local cache, or the cache alone without a server."""
    cache = LocalCatalogCache(settings.client_data_dir)
    if settings.server is None:
        # nothing remote to ask; every fresh lookup fails over to the cache
        return CachingCatalogTransport(InMemoryCatalogTransport(), cache)
    remote = HttpCatalogTransport(settings.server, timeout=settings.config_timeout)
    return CachingCatalogTransport(remote, cache)


def build_plugin_sync(settings: AgentSettings) -> PluginSync:
    """Directory sync when a plugin source is configured, otherwise a no-op."""
    if settings.plugin_source is None:
        return NullPluginSync()
    return DirectoryPluginSync(settings.plugin_source, settings.plugin_dir)


def build_agent(  # pylint: disable=too-many-arguments
    settings: AgentSettings,
    *,
    context: ReconcileContext | None = None,
    transport: CatalogTransport | None = None,
    registry: ResourceTypeRegistry = DEFAULT_REGISTRY,
    echo: Callable[[str], object] = print,
) -> AppContainer:
    """Wire an `Agent` from `settings`.

    Args:
        settings: Resolved settings.
        context: Reconcile context to share; a fresh one over the local
            filesystem and POSIX user database by default. Reuse one context
            across agents to keep "warn once" notices process-wide.
        transport: Catalog transport; built from `settings` by default.
        registry: Resource types the agent can apply.
        echo: Receives the report summary.
    """
    if context is None:
        context = ReconcileContext(
            filesystem=LocalFileSystem(),
            users=PosixUserDirectory(),
            notices=NoticeLedger(),
        )
    acquisition = CatalogAcquisition(
        transport or build_transport(settings),
        registry,
        context,
        LocalClassFile(settings.classfile, settings.resourcefile),
        use_cache_on_failure=settings.use_cache_on_failure,
        trace=settings.trace,
    )
    agent = Agent(
        settings,
        acquisition=acquisition,
        state_store=SqlAlchemyStateStore(settings.statefile),
        report_store=LocalReportStore(settings.reportdir),
        plugin_sync=build_plugin_sync(settings),
        fact_source=SystemFactSource(settings.certname),
        id_generator=ULIDGenerator(),
        echo=echo,
    )
    return AppContainer(agent=agent, acquisition=acquisition, context=context)


def bootstrap(settings: AgentSettings, echo: Callable[[str], object] = print) -> AppContainer:
    """Wire the production application."""
    return build_agent(settings, echo=echo)
