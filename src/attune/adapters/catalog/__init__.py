"""Catalog transport adapters."""

from .cache import LocalCatalogCache
from .caching import CachingCatalogTransport
from .http import HttpCatalogTransport
from .memory import InMemoryCatalogTransport

__all__ = [
    "CachingCatalogTransport",
    "HttpCatalogTransport",
    "InMemoryCatalogTransport",
    "LocalCatalogCache",
]
