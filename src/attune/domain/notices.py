"""Process-scoped "warn once" bookkeeping.

Some conditions (running unprivileged, a desired user that does not exist)
would otherwise be logged for every resource on every cycle. A `NoticeLedger`
is created once by the composition root and shared by every property so each
distinct condition is logged a single time per process.

The ledger relies on single-threaded application; parallel appliers would
need to guard it.
"""

from collections import Counter
from collections.abc import Hashable


class NoticeLedger:
    """Counts occurrences of notice keys and reports the first one."""

    def __init__(self) -> None:
        self._counts: Counter[Hashable] = Counter()

    def first(self, key: Hashable) -> bool:
        """Record an occurrence of `key`.

        Returns:
            bool: True only for the first occurrence since the last reset.
        """
        self._counts[key] += 1
        return self._counts[key] == 1

    def count(self, key: Hashable) -> int:
        """Return how many times `key` has been recorded."""
        return self._counts[key]

    def reset(self) -> None:
        """Forget every recorded notice."""
        self._counts.clear()
