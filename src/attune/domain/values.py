"""Sentinels and the desired-value variant used by properties.

Actual state (``is``) of a property is either a concrete value or
``NOT_FOUND`` when the underlying resource does not exist.

Desired state (``should``) is one of three shapes:

* `Scalar`: a single desired value.
* `ValueList`: several acceptable values; in sync when actual matches any.
* ``NOT_APPLICABLE``: the property has nothing to enforce.

Concrete properties declare which shapes they accept.
"""

from dataclasses import dataclass
from typing import Any

# pylint: disable=too-few-public-methods


def _get_not_found() -> "_NotFoundType":
    # Factory used by pickle to retrieve the one true instance.
    return NOT_FOUND


def _get_not_applicable() -> "_NotApplicableType":
    return NOT_APPLICABLE


@dataclass(frozen=True)
class _NotFoundType:
    """Sentinel recorded as actual state when the underlying resource is absent."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __reduce__(self):  # keep singleton on pickle
        return (_get_not_found, ())


@dataclass(frozen=True)
class _NotApplicableType:
    """Sentinel desired value meaning the property has nothing to enforce."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_APPLICABLE"

    def __reduce__(self):
        return (_get_not_applicable, ())


NOT_FOUND = _NotFoundType()
NOT_APPLICABLE = _NotApplicableType()


@dataclass(frozen=True)
class Scalar:
    """A single desired value."""

    value: Any

    @property
    def values(self) -> tuple[Any, ...]:
        """The desired value as a one-element tuple."""
        return (self.value,)


@dataclass(frozen=True)
class ValueList:
    """Several acceptable desired values, in order of preference."""

    values: tuple[Any, ...]

    @property
    def value(self) -> Any:
        """The preferred (first) value, used when a change must be applied."""
        return self.values[0]


type Desired = Scalar | ValueList | _NotApplicableType
type Actual = Any | _NotFoundType


def is_missing(value: object) -> bool:
    """Return True for either sentinel (nothing concrete to compare or apply)."""
    return isinstance(value, (_NotFoundType, _NotApplicableType))
