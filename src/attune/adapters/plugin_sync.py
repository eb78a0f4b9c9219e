"""Plugin synchronization adapters.

`DirectoryPluginSync` mirrors a plugin source tree into the agent's data
directory: ``<source>/plugins`` to ``<dest>/lib`` and ``<source>/facts.d``
to ``<dest>/facts.d``. A file is copied when it is missing at the
destination or differs in size or modification time.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from attune.interfaces.plugin_sync import PluginSync

logger = logging.getLogger(__name__)


def _mirror(source: Path, dest: Path) -> list[str]:
    if not source.is_dir():
        logger.debug("Plugin source %s does not exist; nothing to sync", source)
        return []

    changed: list[str] = []
    for src in sorted(p for p in source.rglob("*") if p.is_file()):
        relative = src.relative_to(source)
        target = dest / relative
        if target.is_file():
            src_stat, dst_stat = src.stat(), target.stat()
            if (
                src_stat.st_size == dst_stat.st_size
                and int(src_stat.st_mtime) == int(dst_stat.st_mtime)
            ):
                continue
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, target)
        changed.append(relative.as_posix())
        logger.info("Synchronized %s", target)
    return changed


class DirectoryPluginSync(PluginSync):
    """Copy plugins from a local (or mounted) source directory."""

    def __init__(
        self, source: str | os.PathLike[str], dest: str | os.PathLike[str]
    ) -> None:
        self.source = Path(source)
        self.dest = Path(dest)

    def download_plugins(self) -> list[str]:
        return _mirror(self.source / "plugins", self.dest / "lib")

    def download_fact_plugins(self) -> list[str]:
        return _mirror(self.source / "facts.d", self.dest / "facts.d")


class NullPluginSync(PluginSync):
    """Plugin sync used when no plugin source is configured."""

    def download_plugins(self) -> list[str]:
        return []

    def download_fact_plugins(self) -> list[str]:
        return []
