"""Errors raised by catalog transports.

Catalog acquisition treats every one of these as an acquisition failure and
falls back to the cache; the distinction only matters for logging.
"""


class CatalogTransportError(Exception):
    """Base class for all catalog transport errors."""

    def __init__(self, node: str, message: str | None = None) -> None:
        if message is None:
            message = f"catalog for {node} could not be retrieved"
        super().__init__(message)
        self.node = node


class CatalogNotFoundError(CatalogTransportError):
    """Raised when the terminus has no catalog for the node."""

    def __init__(self, node: str, terminus: str) -> None:
        super().__init__(node, f"No catalog for {node} in {terminus}")
        self.terminus = terminus


class TransportError(CatalogTransportError):
    """Raised when the terminus could not be reached or answered with an error."""

    def __init__(self, node: str, reason: str) -> None:
        super().__init__(node, f"Could not fetch catalog for {node}: {reason}")
        self.reason = reason


class MalformedCatalogError(TransportError):
    """Raised when a catalog document cannot be decoded."""

    def __init__(self, node: str, reason: str) -> None:
        CatalogTransportError.__init__(
            self, node, f"Malformed catalog for {node}: {reason}"
        )
        self.reason = reason
