"""Interface for the key-value state kept between agent cycles."""

import abc
from typing import Any


class StateStore(abc.ABC):
    """Persisted cross-cycle cache.

    State is grouped in named sections (e.g. ``"configuration"``), each a
    small JSON-serializable dict. Sections are read after `load` and written
    back by `save`.
    """

    @abc.abstractmethod
    def load(self) -> None:
        """Load persisted state into memory.

        A corrupt store is discarded and recreated once; if it still cannot be
        read the error is fatal.

        Raises:
            StateCorruptionError: If the store cannot be read or repaired.
        """

    @abc.abstractmethod
    def cache(self, section: str) -> dict[str, Any]:
        """Return the mutable dict for `section`, creating it if needed.

        Changes become persistent on the next `save`.
        """

    @abc.abstractmethod
    def save(self) -> None:
        """Persist every section."""
