"""Remote catalog transport backed by a local cache."""

from __future__ import annotations

import logging
from dataclasses import replace

from attune.interfaces.catalog import (
    CatalogCache,
    CatalogTransport,
    CatalogTransportError,
    FindOptions,
    WireCatalog,
)

logger = logging.getLogger(__name__)


class CachingCatalogTransport(CatalogTransport):
    """Ask the remote terminus and remember every fresh answer.

    ``ignore_terminus`` answers from the cache alone. Otherwise the remote
    terminus is asked and a successful answer replaces the cached copy. A
    failure to write the cache is logged; it never fails the lookup.
    """

    def __init__(self, remote: CatalogTransport, cache: CatalogCache) -> None:
        self.remote = remote
        self.cache = cache

    def find(self, node: str, options: FindOptions) -> WireCatalog:
        if options.ignore_terminus:
            return self.cache.find(node, options)

        catalog = self.remote.find(node, options)
        try:
            # cached under the requested name so cache-only lookups find it
            self.cache.save(
                catalog if catalog.name == node else replace(catalog, name=node)
            )
        except (OSError, CatalogTransportError) as e:
            logger.warning("Could not cache catalog for %s: %s", node, e)
        return catalog

    def close(self) -> None:
        self.remote.close()
        self.cache.close()
