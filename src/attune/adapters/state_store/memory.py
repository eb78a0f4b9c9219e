"""In-memory state store for tests."""

from __future__ import annotations

import copy
from typing import Any

from attune.interfaces.state_store import StateCorruptionError, StateStore


class InMemoryStateStore(StateStore):
    """StateStore implementation that keeps sections in a dict.

    `saved` holds a deep copy of the sections as of the last `save`. Set
    `corrupt` to make `load` fail as an unrepairable store would.
    """

    def __init__(
        self,
        sections: dict[str, dict[str, Any]] | None = None,
        corrupt: bool = False,
    ) -> None:
        self.saved: dict[str, dict[str, Any]] = copy.deepcopy(sections or {})
        self.corrupt = corrupt
        self.loads = 0
        self._sections: dict[str, dict[str, Any]] = {}

    def load(self) -> None:
        self.loads += 1
        if self.corrupt:
            raise StateCorruptionError("memory", "store marked corrupt")
        self._sections = copy.deepcopy(self.saved)

    def cache(self, section: str) -> dict[str, Any]:
        return self._sections.setdefault(section, {})

    def save(self) -> None:
        self.saved = copy.deepcopy(self._sections)
