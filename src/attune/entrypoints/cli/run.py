"""``attune run``: one agent cycle.

Exit status
- ``0`` when the cycle finished, even if some resources failed.
- With ``--detailed-exitcodes``: ``2`` if resources failed, ``4`` if
  resources changed, ``6`` if both.
- ``1`` when the cycle could not run at all (unusable settings, a state
  file that cannot be repaired, a failing post-run hook).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from attune.bootstrap import bootstrap
from attune.config import ConfigurationError, build_settings
from attune.domain.errors import DomainError
from attune.interfaces.catalog import MalformedCatalogError, WireCatalog
from attune.interfaces.state_store import StateCorruptionError
from attune.service_layer.hooks import HookFailure

from .helpers import success, warn

if TYPE_CHECKING:
    from attune.domain.catalog import Catalog
    from attune.domain.report import RunReport
    from attune.service_layer.acquisition import CatalogAcquisition

EXIT_FAILED = 2
EXIT_CHANGED = 4

_OPTION_NAMES = {
    "config_timeout": "--timeout",
    "server": "--server",
    "certname": "--certname",
}


def detailed_exit_code(report: RunReport) -> int:
    """Exit status encoding whether resources changed and/or failed."""
    statuses = report.resource_statuses.values()
    code = 0
    if any(s.failed for s in statuses):
        code |= EXIT_FAILED
    if any(s.changed for s in statuses):
        code |= EXIT_CHANGED
    return code


def load_catalog(path: Path, node: str, acquisition: CatalogAcquisition) -> Catalog:
    """Read a catalog document from `path` and convert it for applying."""
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
        wire = WireCatalog.from_dict(document, node=node)
        return acquisition.convert_catalog(wire, None, host_config=False)
    except (OSError, ValueError, MalformedCatalogError, DomainError) as e:
        raise click.ClickException(f"Cannot load catalog {path}: {e}") from e


@click.command()
@click.option(
    "--server",
    envvar="ATTUNE_SERVER",
    show_envvar=True,
    help="Base URL of the configuration server (e.g. https://config:8140).",
)
@click.option(
    "--certname",
    envvar="ATTUNE_CERTNAME",
    show_envvar=True,
    help="Name of this node. Defaults to the fully qualified host name.",
)
@click.option(
    "--timeout",
    "config_timeout",
    envvar="ATTUNE_CONFIG_TIMEOUT",
    show_envvar=True,
    help="Seconds to wait for the configuration server (default 120).",
)
@click.option(
    "--use-cache-on-failure/--no-use-cache-on-failure",
    default=True,
    envvar="ATTUNE_USE_CACHE_ON_FAILURE",
    show_envvar=True,
    show_default=True,
    help="Apply the last cached catalog when the server cannot provide one.",
)
@click.option(
    "--report/--no-report",
    default=True,
    envvar="ATTUNE_REPORT",
    show_envvar=True,
    show_default=True,
    help="Write a JSON report after the run.",
)
@click.option(
    "--summarize",
    is_flag=True,
    envvar="ATTUNE_SUMMARIZE",
    show_envvar=True,
    help="Print the report's metric summary to stdout.",
)
@click.option(
    "--trace",
    is_flag=True,
    envvar="ATTUNE_TRACE",
    show_envvar=True,
    help="Log tracebacks for contained errors.",
)
@click.option(
    "--statedir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="ATTUNE_STATEDIR",
    show_envvar=True,
    help="Directory for state, cached catalogs and reports.",
)
@click.option(
    "--prerun-command",
    envvar="ATTUNE_PRERUN_COMMAND",
    show_envvar=True,
    help="Command to run before the cycle.",
)
@click.option(
    "--postrun-command",
    envvar="ATTUNE_POSTRUN_COMMAND",
    show_envvar=True,
    help="Command to run after the cycle.",
)
@click.option(
    "--plugin-source",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="ATTUNE_PLUGIN_SOURCE",
    show_envvar=True,
    help="Directory to synchronize plugins and fact plugins from.",
)
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Apply this catalog JSON file instead of fetching one.",
)
@click.option(
    "--detailed-exitcodes",
    is_flag=True,
    help="Exit with 2 if resources failed, 4 if resources changed, 6 for both.",
)
@click.pass_context
def run(  # pylint: disable=too-many-arguments, too-many-locals
    ctx: click.Context,
    catalog_path: Path | None,
    detailed_exitcodes: bool,
    **options: object,
) -> None:
    """Run one agent cycle: fetch the catalog, apply it, report."""
    try:
        settings = build_settings(**options)
    except ConfigurationError as e:
        raise click.BadParameter(
            str(e), ctx=ctx, param_hint=_OPTION_NAMES.get(e.setting, e.setting)
        ) from e

    container = bootstrap(settings, echo=click.echo)
    catalog = (
        load_catalog(catalog_path, settings.certname, container.acquisition)
        if catalog_path is not None
        else None
    )

    try:
        report = container.agent.run(catalog)
    except (StateCorruptionError, HookFailure) as e:
        raise click.ClickException(str(e)) from e

    failed = sum(s.failed for s in report.resource_statuses.values())
    if failed:
        warn(f"{failed} resource(s) failed; see the report {report.run_id}.")
    else:
        success(f"Run {report.run_id} finished: {report.status}.")

    if detailed_exitcodes and (code := detailed_exit_code(report)):
        ctx.exit(code)
