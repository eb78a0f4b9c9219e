"""Fixtures for catalog cache contract tests."""

from collections.abc import Iterable

import pytest

from attune.adapters.catalog import InMemoryCatalogTransport, LocalCatalogCache
from attune.interfaces.catalog import CatalogCache


@pytest.fixture(params=["memory", "local"])
def catalog_cache(request: pytest.FixtureRequest, tmp_path) -> Iterable[CatalogCache]:
    """Yield an empty catalog cache.

    Supported params:
      - `"memory"` → InMemoryCatalogTransport
      - `"local"` → LocalCatalogCache under `tmp_path`
    """
    match request.param:
        case "memory":
            yield InMemoryCatalogTransport()
        case "local":
            yield LocalCatalogCache(tmp_path / "client_data" / "catalog")
        case _:
            raise ValueError(f"unknown catalog cache type: {request.param}")
