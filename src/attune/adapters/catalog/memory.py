"""In-memory catalog transport for tests and local catalogs."""

from __future__ import annotations

from attune.interfaces.catalog import (
    CatalogCache,
    CatalogNotFoundError,
    FindOptions,
    WireCatalog,
)


class InMemoryCatalogTransport(CatalogCache):
    """CatalogCache implementation holding catalogs in a dict.

    Args:
        catalogs: Catalogs to serve, keyed by node name.
        error: If given, every `find` raises it.

    Every lookup is recorded in `calls`; `closed` counts `close` calls.
    """

    TERMINUS = "memory"

    def __init__(
        self,
        catalogs: dict[str, WireCatalog] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.catalogs: dict[str, WireCatalog] = dict(catalogs or {})
        self.error = error
        self.calls: list[tuple[str, FindOptions]] = []
        self.closed = 0

    def find(self, node: str, options: FindOptions) -> WireCatalog:
        self.calls.append((node, options))
        if self.error is not None:
            raise self.error
        try:
            return self.catalogs[node]
        except KeyError as e:
            raise CatalogNotFoundError(node, self.TERMINUS) from e

    def save(self, catalog: WireCatalog) -> None:
        self.catalogs[catalog.name] = catalog

    def close(self) -> None:
        self.closed += 1
