"""Catalog transport port."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from attune.interfaces.facts import FactPayload

    from .wire import WireCatalog


@dataclass(frozen=True)
class FindOptions:
    """Options for a single catalog lookup.

    Attributes:
        facts: Serialized facts to send with a remote request.
        ignore_cache: Skip any local cache and ask the remote terminus.
        ignore_terminus: Skip the remote terminus and answer from the cache only.
    """

    facts: FactPayload | None = None
    ignore_cache: bool = False
    ignore_terminus: bool = False


class CatalogTransport(abc.ABC):
    """Contract for finding a node's compiled catalog."""

    @abc.abstractmethod
    def find(self, node: str, options: FindOptions) -> WireCatalog:
        """Find the catalog for `node`.

        Args:
            node: The node (certificate) name.
            options: Cache and fact options for this lookup.

        Returns:
            WireCatalog: The compiled catalog.

        Raises:
            CatalogNotFoundError: If the terminus has no catalog for `node`.
            TransportError: If the terminus could not be reached or failed.
            MalformedCatalogError: If the answer could not be decoded.
        """

    def close(self) -> None:
        """Release open connections. Safe to call repeatedly."""


class CatalogCache(CatalogTransport):
    """A transport that can also remember catalogs for later cache-only lookups."""

    @abc.abstractmethod
    def save(self, catalog: WireCatalog) -> None:
        """Store `catalog` as the latest known catalog for its node."""
