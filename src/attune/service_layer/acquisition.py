"""Catalog acquisition: fetch fresh, fall back to the cache, convert.

`CatalogAcquisition.fetch` never raises for transport trouble. Under a
network partition it returns the cached catalog, or None when there is no
usable cache (or the cache is disabled). None is a normal outcome; the
caller skips the run.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from attune.domain.catalog import Catalog
from attune.domain.errors import PROCESS_FATAL
from attune.interfaces.catalog import FindOptions

if TYPE_CHECKING:
    from attune.domain.properties import ReconcileContext
    from attune.domain.resources import ResourceTypeRegistry
    from attune.interfaces.catalog import CatalogTransport, WireCatalog
    from attune.interfaces.class_file import ClassFile
    from attune.interfaces.facts import FactPayload

logger = logging.getLogger(__name__)


class CatalogAcquisition:  # pylint: disable=too-many-arguments
    """Obtain a node's catalog and turn it into applicable resources.

    Args:
        transport: Answers remote lookups and, with ``ignore_terminus``,
            cache-only lookups.
        registry: Builds concrete resources from wire declarations.
        context: Collaborators handed to every built resource.
        class_file: Records the classes and resources of converted catalogs.
        use_cache_on_failure: Whether a failed remote lookup may fall back
            to the cache.
        trace: Log tracebacks for contained failures.
    """

    def __init__(
        self,
        transport: CatalogTransport,
        registry: ResourceTypeRegistry,
        context: ReconcileContext,
        class_file: ClassFile,
        *,
        use_cache_on_failure: bool = True,
        trace: bool = False,
    ) -> None:
        self.transport = transport
        self.registry = registry
        self.context = context
        self.class_file = class_file
        self.use_cache_on_failure = use_cache_on_failure
        self.trace = trace

    def fetch(self, node: str, facts: FactPayload | None = None) -> Catalog | None:
        """Return the catalog for `node`, or None if none could be obtained."""
        result: WireCatalog | None = None
        duration = 0.0

        started = time.perf_counter()
        try:
            result = self.transport.find(node, FindOptions(facts=facts, ignore_cache=True))
            duration = time.perf_counter() - started
        except PROCESS_FATAL:
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "Could not retrieve catalog from remote server: %s", e, exc_info=self.trace
            )

        if result is None:
            if not self.use_cache_on_failure:
                logger.warning("Not using cache on failed catalog")
                return None

            started = time.perf_counter()
            try:
                result = self.transport.find(
                    node, FindOptions(facts=facts, ignore_terminus=True)
                )
                duration = time.perf_counter() - started
                logger.info("Using cached catalog")
            except PROCESS_FATAL:
                raise
            except Exception as e:  # pylint: disable=broad-except
                logger.error(
                    "Could not retrieve catalog from cache: %s", e, exc_info=self.trace
                )
                return None

        try:
            return self.convert_catalog(result, duration)
        except PROCESS_FATAL:
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error("Could not convert catalog for %s: %s", node, e, exc_info=self.trace)
            return None

    def convert_catalog(
        self, wire: WireCatalog, duration: float | None, host_config: bool = True
    ) -> Catalog:
        """Build the applicable catalog from a wire catalog.

        A host catalog (the node's full configuration) also records its
        classes and resources through the class file; ad-hoc catalogs do not.

        Raises:
            UnknownResourceTypeError: If a declaration names an unknown type.
            UnknownAttributeError: If a declaration has an unknown attribute.
            DuplicateResourceError: If two declarations share a reference.
        """
        catalog = Catalog(name=wire.name, version=wire.version, classes=list(wire.classes))
        for declaration in wire.resources:
            catalog.add(
                self.registry.build(
                    declaration.type,
                    declaration.title,
                    declaration.parameters,
                    self.context,
                )
            )
        catalog.finalize()
        catalog.retrieval_duration = duration
        catalog.host_config = host_config
        if host_config:
            self.write_class_file(catalog)
        return catalog

    def write_class_file(self, catalog: Catalog) -> None:
        """Record the catalog's classes and resources; failures are only logged."""
        try:
            self.class_file.write(catalog.classes, [r.ref for r in catalog])
        except PROCESS_FATAL:
            raise
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "Could not create class file for %s: %s", catalog.name, e, exc_info=self.trace
            )

    def close(self) -> None:
        """Close the transport's connections."""
        self.transport.close()
