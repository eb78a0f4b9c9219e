"""On-disk cache of the last catalog fetched for each node."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from attune.adapters.atomic import write_text_atomic
from attune.interfaces.catalog import (
    CatalogCache,
    CatalogNotFoundError,
    FindOptions,
    TransportError,
    WireCatalog,
)

logger = logging.getLogger(__name__)


class LocalCatalogCache(CatalogCache):
    """Keep one JSON document per node under `directory`.

    Writes are atomic, so a crash never leaves a truncated catalog behind.
    """

    TERMINUS = "cache"

    def __init__(self, directory: str | os.PathLike[str]) -> None:
        self.directory = Path(directory)

    def path_for(self, node: str) -> Path:
        """Return the cache file for `node`."""
        if not node or node in {".", ".."} or "/" in node or "\\" in node:
            raise TransportError(node, "node name is not a valid file name")
        return self.directory / f"{node}.json"

    def find(self, node: str, options: FindOptions) -> WireCatalog:
        path = self.path_for(node)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise CatalogNotFoundError(node, self.TERMINUS) from e
        except OSError as e:
            raise TransportError(node, f"cannot read {path}: {e}") from e

        try:
            document = json.loads(text)
        except ValueError as e:
            raise TransportError(node, f"cached catalog {path} is not JSON: {e}") from e
        return WireCatalog.from_dict(document, node=node)

    def save(self, catalog: WireCatalog) -> None:
        path = write_text_atomic(
            self.path_for(catalog.name),
            json.dumps(catalog.to_dict(), indent=2, sort_keys=True),
        )
        logger.debug("Cached catalog for %s in %s", catalog.name, path)
