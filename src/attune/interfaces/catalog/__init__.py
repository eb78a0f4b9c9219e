"""Catalog transport interfaces."""

from .errors import (
    CatalogNotFoundError,
    CatalogTransportError,
    MalformedCatalogError,
    TransportError,
)
from .transport import CatalogCache, CatalogTransport, FindOptions
from .wire import WireCatalog, WireResource

__all__ = [
    "CatalogCache",
    "CatalogNotFoundError",
    "CatalogTransport",
    "CatalogTransportError",
    "FindOptions",
    "MalformedCatalogError",
    "TransportError",
    "WireCatalog",
    "WireResource",
]
