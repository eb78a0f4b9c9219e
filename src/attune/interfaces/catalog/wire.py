"""Wire-level catalog DTOs.

A wire catalog is plain data: resource types, titles and raw parameters as
compiled by the authority. It becomes an applied `attune.domain.catalog.Catalog`
only after conversion.

JSON shape::

    {
      "name": "web01.example.com",
      "version": 1700000000,
      "classes": ["base", "web"],
      "resources": [
        {"type": "file", "title": "/etc/motd", "parameters": {"mode": "644"}}
      ]
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import MalformedCatalogError


@dataclass(frozen=True)
class WireResource:
    """One resource declaration as compiled by the authority."""

    type: str
    title: str
    parameters: Mapping[str, Any] = field(default_factory=dict)

    @property
    def ref(self) -> str:
        """Reference string, e.g. ``File[/etc/motd]``."""
        return f"{self.type.capitalize()}[{self.title}]"


@dataclass(frozen=True)
class WireCatalog:
    """A compiled catalog for one node."""

    name: str
    version: int | None = None
    resources: tuple[WireResource, ...] = ()
    classes: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, node: str | None = None) -> WireCatalog:
        """Decode a catalog document.

        Args:
            data: The decoded JSON document.
            node: Node name used in error messages when the document has none.

        Raises:
            MalformedCatalogError: If the document does not have the expected shape.
        """
        label = node or "<unknown>"
        if not isinstance(data, Mapping):
            raise MalformedCatalogError(label, "document is not an object")
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise MalformedCatalogError(label, "missing node name")

        version = data.get("version")
        if version is not None and (
            isinstance(version, bool) or not isinstance(version, int)
        ):
            raise MalformedCatalogError(name, "version must be an integer")

        classes = data.get("classes", [])
        if not isinstance(classes, list) or not all(isinstance(c, str) for c in classes):
            raise MalformedCatalogError(name, "classes must be a list of strings")

        raw_resources = data.get("resources", [])
        if not isinstance(raw_resources, list):
            raise MalformedCatalogError(name, "resources must be a list")

        resources = []
        for index, item in enumerate(raw_resources):
            if not isinstance(item, Mapping):
                raise MalformedCatalogError(name, f"resource #{index} is not an object")
            type_name, title = item.get("type"), item.get("title")
            parameters = item.get("parameters", {})
            if not isinstance(type_name, str) or not isinstance(title, str):
                raise MalformedCatalogError(
                    name, f"resource #{index} needs a string type and title"
                )
            if not isinstance(parameters, Mapping):
                raise MalformedCatalogError(
                    name, f"resource #{index} parameters must be an object"
                )
            resources.append(WireResource(type_name, title, dict(parameters)))

        return cls(
            name=name, version=version, resources=tuple(resources), classes=tuple(classes)
        )

    def to_dict(self) -> dict[str, Any]:
        """Encode the catalog as a JSON-serializable document."""
        return {
            "name": self.name,
            "version": self.version,
            "classes": list(self.classes),
            "resources": [
                {"type": r.type, "title": r.title, "parameters": dict(r.parameters)}
                for r in self.resources
            ],
        }
