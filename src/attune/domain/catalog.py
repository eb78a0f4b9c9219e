"""The applied catalog: an ordered set of concrete resources for one node."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from attune.domain.errors import DuplicateResourceError

if TYPE_CHECKING:
    from attune.domain.resources import Resource


@dataclass
class Catalog:
    """Desired state for one node, ready to be applied.

    Attributes:
        name: The node the catalog was compiled for.
        version: Compile timestamp assigned by the authority.
        resources: Resources in application order.
        classes: Class names the node was classified into.
        host_config: True for a node's full configuration, False for ad-hoc
            catalogs.
        retrieval_duration: Seconds spent fetching the catalog, if fetched.
    """

    name: str
    version: int | None = None
    resources: list[Resource] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    host_config: bool = False
    retrieval_duration: float | None = None
    _finalized: bool = field(default=False, init=False, repr=False)

    def add(self, resource: Resource) -> None:
        """Append a resource; order of addition is application order."""
        if self._finalized:
            raise RuntimeError(f"catalog {self.name} is finalized")
        self.resources.append(resource)

    def finalize(self) -> None:
        """Check the resource set and freeze it.

        Raises:
            DuplicateResourceError: If two resources share a reference.
        """
        seen: set[str] = set()
        for resource in self.resources:
            if resource.ref in seen:
                raise DuplicateResourceError(resource.ref)
            seen.add(resource.ref)
        self._finalized = True

    def resource(self, ref: str) -> Resource | None:
        """Look a resource up by reference, e.g. ``File[/tmp/x]``."""
        return next((r for r in self.resources if r.ref == ref), None)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def clear(self) -> None:
        """Drop every resource and its cached lookups."""
        for resource in self.resources:
            resource.clear()
        self.resources = []
        self.classes = []
        self._finalized = False
