"""Base class for reconcilable properties.

A property converges one attribute of one resource through a fixed cycle:

1. `Property.retrieve` reads the actual state (``is``) from the platform,
   recording ``NOT_FOUND`` when the underlying resource is absent.
2. `Property.should` normalizes the raw desired input once, on first use,
   and lets the concrete property adjust it to its resource (see
   `Property.adjust`).
3. `Property.in_sync` compares actual against desired.
4. `Property.sync` applies the change and returns the property's event.

Concrete properties implement `normalize`, `display`, `apply` and
`describe_change`; file-backed ones derive from `StatProperty`.
"""

from __future__ import annotations

import abc
import logging
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, cast

from attune.domain.errors import (
    PROCESS_FATAL,
    ApplyError,
    DevError,
    UnretrievedStateError,
    ValidationError,
)
from attune.domain.values import (
    NOT_APPLICABLE,
    NOT_FOUND,
    Actual,
    Desired,
    Scalar,
    ValueList,
    is_missing,
)

if TYPE_CHECKING:
    from attune.domain.notices import NoticeLedger
    from attune.domain.resources import FileResource, Resource
    from attune.interfaces.filesystem import FileStat, FileSystem
    from attune.interfaces.user_directory import UserDirectory

logger = logging.getLogger(__name__)

_UNRETRIEVED: Any = object()


@dataclass(frozen=True)
class ReconcileContext:
    """Process-scoped collaborators shared by every property.

    Built once by the composition root. `notices` carries the "warn once"
    state and must outlive individual runs.
    """

    filesystem: FileSystem
    users: UserDirectory
    notices: NoticeLedger


class Property(abc.ABC):
    """One manageable attribute of a resource."""

    NAME: ClassVar[str]
    """Attribute name as it appears in catalog parameters (e.g. ``"mode"``)."""

    EVENT: ClassVar[str]
    """Change event emitted after a successful sync."""

    ACCEPTS: ClassVar[frozenset[type]] = frozenset({Scalar})
    """Desired-value shapes this property accepts (`Scalar`, `ValueList`)."""

    def __init__(
        self, resource: Resource, desired: object, context: ReconcileContext
    ) -> None:
        # Back-reference only; the resource owns its properties, not the reverse.
        self._resource = weakref.ref(resource)
        self._raw = desired
        self._should: Desired | None = None
        self._fixed = False
        self._is: Actual = _UNRETRIEVED
        self.context = context

    # --- Identity ---

    @property
    def name(self) -> str:
        """The property name."""
        return self.NAME

    @property
    def event(self) -> str:
        """The change event emitted on a successful sync."""
        return self.EVENT

    @property
    def resource(self) -> Resource:
        """The owning resource."""
        resource = self._resource()
        if resource is None:
            raise DevError(f"{self.NAME} property outlived its resource")
        return resource

    @property
    def label(self) -> str:
        """Log label, e.g. ``File[/tmp/x]/mode``."""
        return f"{self.resource.ref}/{self.NAME}"

    # --- Desired state ---

    @property
    def should(self) -> Desired:
        """The normalized (and, once possible, adjusted) desired value.

        Raises:
            ValidationError: If the raw desired input cannot be normalized.
        """
        if self._should is None:
            self._should = self._build_desired(self._raw)
        if not self._fixed:
            adjusted = self.adjust(self._should)
            if adjusted is not None:
                self._should = adjusted
                self._fixed = True
        return self._should

    def adjust(self, desired: Desired) -> Desired | None:
        """Adapt the desired value to the resource.

        Called until it returns something other than None; the returned value
        replaces the desired value and no further adjustment happens. Returning
        None means the adjustment cannot be decided yet (e.g. the resource does
        not exist) and should be attempted again later.
        """
        return desired

    def _build_desired(self, raw: object) -> Desired:
        if raw is None or raw is NOT_APPLICABLE:
            return NOT_APPLICABLE
        if isinstance(raw, (list, tuple)):
            if ValueList not in self.ACCEPTS:
                raise self.invalid(raw, "multiple values are not supported")
            if not raw:
                raise self.invalid(raw, "at least one value is required")
            return ValueList(tuple(self.normalize(value) for value in raw))
        return Scalar(self.normalize(raw))

    def invalid(self, value: object, reason: str) -> ValidationError:
        """Build a `ValidationError` for this property."""
        return ValidationError(self.resource.ref, self.NAME, value, reason)

    @abc.abstractmethod
    def normalize(self, value: Any) -> Any:
        """Convert one raw desired value into its canonical form.

        Raises:
            ValidationError: If `value` cannot be parsed.
        """

    # --- Actual state ---

    @abc.abstractmethod
    def retrieve(self) -> Actual:
        """Read the actual value from the platform and record it.

        Must not raise when the underlying resource is missing; record
        ``NOT_FOUND`` instead.
        """

    @property
    def is_(self) -> Actual:
        """The last retrieved actual value.

        Raises:
            UnretrievedStateError: If `retrieve` has not run this cycle.
        """
        if self._is is _UNRETRIEVED:
            raise UnretrievedStateError(self.resource.ref, self.NAME)
        return self._is

    @is_.setter
    def is_(self, value: Actual) -> None:
        self._is = value

    @property
    def retrieved(self) -> bool:
        """Whether `retrieve` has run since construction or the last `forget`."""
        return self._is is not _UNRETRIEVED

    def forget(self) -> None:
        """Drop the retrieved actual value."""
        self._is = _UNRETRIEVED

    # --- Comparison ---

    def in_sync(self) -> bool:
        """Return True if the actual value satisfies the desired value."""
        should = self.should
        if should is NOT_APPLICABLE:
            return True
        current = self.is_
        if current is NOT_FOUND:
            return False
        return any(self.matches(current, value) for value in should.values)

    def matches(self, current: Any, desired: Any) -> bool:
        """Compare one actual value with one desired value."""
        return current == desired

    @abc.abstractmethod
    def display(self, value: Any) -> str:
        """Render a value for logs and reports."""

    # --- Convergence ---

    def precondition(self) -> bool:
        """Return False to skip `sync` entirely (a logged no-op, not an error)."""
        return True

    def sync(self) -> str | None:
        """Converge the property.

        Returns:
            str | None: The property's event when a change was applied,
            otherwise None.

        Raises:
            ValidationError: If the desired value is malformed.
            ApplyError: If the platform operation fails.
        """
        if not self.precondition():
            return None

        if self.is_ is NOT_FOUND:
            self.resource.invalidate()
            self.retrieve()
            if self.is_ is NOT_FOUND:
                logger.info(
                    "%s: %s does not exist; cannot set %s",
                    self.label,
                    self.resource.title,
                    self.NAME,
                )
                return None
            logger.debug("%s: after refresh, is %s", self.label, self.display(self.is_))

        if self.in_sync():
            return None

        target = self.should.value  # type: ignore[union-attr]
        if is_missing(target):
            return None

        try:
            self.apply(target)
        except PROCESS_FATAL:
            raise
        except Exception as e:  # pylint: disable=broad-except
            raise ApplyError(
                self.resource.ref, self.NAME, self.describe_change(target), e
            ) from e

        self._is = self.actual_after(target)
        self.resource.invalidate()
        return self.EVENT

    def actual_after(self, target: Any) -> Any:
        """The actual value recorded after `target` was applied successfully."""
        return target

    @abc.abstractmethod
    def apply(self, target: Any) -> None:
        """Perform the platform operation that sets the value to `target`."""

    @abc.abstractmethod
    def describe_change(self, target: Any) -> str:
        """Short description of the platform operation, used in errors."""


class StatProperty(Property):
    """A property whose actual value comes from the resource's stat result."""

    def retrieve(self) -> Actual:
        stat = self.file.stat()
        self._is = NOT_FOUND if stat is None else self.from_stat(stat)
        return self._is

    @abc.abstractmethod
    def from_stat(self, stat: FileStat) -> Any:
        """Extract the actual value from a stat result."""

    @property
    def file(self) -> FileResource:
        """The owning resource, typed as a file."""
        return cast("FileResource", self.resource)

    @property
    def filesystem(self) -> FileSystem:
        """The filesystem port from the reconcile context."""
        return self.context.filesystem
