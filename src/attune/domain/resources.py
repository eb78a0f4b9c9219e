"""Managed resources and the registry that builds them from catalog data.

A resource is identified by its type and title for the whole run; only its
properties carry mutable desired and actual values.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable, Iterator, Mapping
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, ClassVar

from attune.domain.errors import (
    ResourceError,
    UnknownAttributeError,
    UnknownResourceTypeError,
)
from attune.domain.properties import ModeProperty, OwnerProperty

if TYPE_CHECKING:
    from attune.domain.properties import Property, ReconcileContext
    from attune.interfaces.filesystem import FileStat

_UNCACHED: Any = object()


class Resource(abc.ABC):
    """A named, typed entity owning zero or more properties."""

    TYPE: ClassVar[str]
    PROPERTIES: ClassVar[tuple[type[Property], ...]] = ()
    """Property classes in the order they are reconciled."""

    PARAMETERS: ClassVar[frozenset[str]] = frozenset()
    """Non-property attributes the type understands (e.g. ``path``)."""

    def __init__(
        self,
        title: str,
        parameters: Mapping[str, Any],
        context: ReconcileContext,
    ) -> None:
        self._title = title
        self.context = context

        property_names = {cls.NAME for cls in self.PROPERTIES}
        for name in parameters:
            if name not in property_names and name not in self.PARAMETERS:
                raise UnknownAttributeError(self.ref, name)

        self.parameters: dict[str, Any] = {
            name: value for name, value in parameters.items() if name in self.PARAMETERS
        }
        self._properties: dict[str, Property] = {
            cls.NAME: cls(self, parameters[cls.NAME], context)
            for cls in self.PROPERTIES
            if cls.NAME in parameters
        }

    @property
    def type(self) -> str:
        """The resource type name, e.g. ``"file"``."""
        return self.TYPE

    @property
    def title(self) -> str:
        """The resource title, unique per type within a catalog."""
        return self._title

    @property
    def ref(self) -> str:
        """Reference string, e.g. ``File[/etc/motd]``."""
        return f"{self.TYPE.capitalize()}[{self._title}]"

    @property
    def properties(self) -> list[Property]:
        """Managed properties in reconciliation order."""
        return list(self._properties.values())

    def get_property(self, name: str) -> Property | None:
        """Return the managed property called `name`, if any."""
        return self._properties.get(name)

    def __iter__(self) -> Iterator[Property]:
        return iter(self._properties.values())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.ref}>"

    def invalidate(self) -> None:
        """Drop cached platform lookups so the next read hits the platform."""

    def clear(self) -> None:
        """Discard cached and retrieved state at the end of a run."""
        self.invalidate()
        for prop in self._properties.values():
            prop.forget()


class FileResource(Resource):
    """A file or directory at an absolute path."""

    TYPE = "file"
    PROPERTIES = (OwnerProperty, ModeProperty)
    PARAMETERS = frozenset({"path"})

    def __init__(
        self,
        title: str,
        parameters: Mapping[str, Any],
        context: ReconcileContext,
    ) -> None:
        super().__init__(title, parameters, context)
        self.path = str(self.parameters.get("path", title))
        if not PurePosixPath(self.path).is_absolute():
            raise ResourceError(
                f"{self.ref}: file paths must be fully qualified, not '{self.path}'"
            )
        self._stat: FileStat | None = _UNCACHED

    def stat(self, refresh: bool = False) -> FileStat | None:
        """Stat the file, reusing the cached result unless `refresh` is set.

        Returns:
            FileStat | None: The stat result, or None if the file does not exist.
        """
        if refresh or self._stat is _UNCACHED:
            self._stat = self.context.filesystem.stat(self.path)
        return self._stat

    def is_directory(self) -> bool:
        """Return True if the file exists and is a directory."""
        stat = self.stat()
        return stat is not None and stat.is_dir

    def invalidate(self) -> None:
        self._stat = _UNCACHED


class ResourceTypeRegistry:
    """Maps catalog type names to resource classes."""

    def __init__(self, types: Iterable[type[Resource]]) -> None:
        self._types = {cls.TYPE: cls for cls in types}

    def __contains__(self, type_name: str) -> bool:
        return type_name.lower() in self._types

    def build(
        self,
        type_name: str,
        title: str,
        parameters: Mapping[str, Any],
        context: ReconcileContext,
    ) -> Resource:
        """Instantiate the resource class registered for `type_name`.

        Raises:
            UnknownResourceTypeError: If no class is registered for `type_name`.
            UnknownAttributeError: If `parameters` names an unknown attribute.
            ResourceError: If the type rejects the resource otherwise.
        """
        try:
            cls = self._types[type_name.lower()]
        except KeyError:
            raise UnknownResourceTypeError(type_name) from None
        return cls(title, parameters, context)


DEFAULT_REGISTRY = ResourceTypeRegistry([FileResource])
