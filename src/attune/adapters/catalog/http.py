"""Catalog transport that asks the configuration server over HTTP."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from attune.interfaces.catalog import (
    CatalogNotFoundError,
    CatalogTransport,
    FindOptions,
    TransportError,
    WireCatalog,
)

logger = logging.getLogger(__name__)


class HttpCatalogTransport(CatalogTransport):
    """Fetch catalogs with ``POST {server}/catalog/{node}``.

    Facts travel as the form fields ``facts_format`` and ``facts``. The
    underlying `httpx.Client` is created on first use and released by
    `close`, so one transport can serve many cycles.

    Args:
        server: Base URL of the configuration server.
        timeout: Seconds to wait for connect, read and write operations.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    TERMINUS = "rest"

    def __init__(
        self,
        server: str,
        timeout: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.server = server.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """The shared HTTP client, opened lazily."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.server,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    def find(self, node: str, options: FindOptions) -> WireCatalog:
        if options.ignore_terminus:
            raise CatalogNotFoundError(node, self.TERMINUS)

        data = options.facts.as_form() if options.facts is not None else {}
        url = f"/catalog/{quote(node, safe='')}"
        logger.debug("Requesting catalog for %s from %s%s", node, self.server, url)
        try:
            response = self.client.post(url, data=data)
        except httpx.HTTPError as e:
            raise TransportError(node, str(e) or type(e).__name__) from e

        if response.status_code == httpx.codes.NOT_FOUND:
            raise CatalogNotFoundError(node, self.TERMINUS)
        if response.is_error:
            raise TransportError(
                node, f"server answered {response.status_code} {response.reason_phrase}"
            )

        try:
            document = response.json()
        except ValueError as e:
            raise TransportError(node, f"response is not JSON: {e}") from e
        return WireCatalog.from_dict(document, node=node)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
