"""File permission bits.

Only full numeric modes are supported (``"644"``, ``"0755"``, ``0o600``);
symbolic forms such as ``u+rwx`` are not.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from attune.domain.values import NOT_APPLICABLE, Desired, Scalar, ValueList, is_missing

from .base import StatProperty

if TYPE_CHECKING:
    from attune.interfaces.filesystem import FileStat

PERMISSION_BITS = 0o7777
DIGITS = re.compile(r"[0-9]+")

# (read bit, execute bit) for owner, group, other
READ_IMPLIES_EXECUTE = ((0o400, 0o100), (0o040, 0o010), (0o004, 0o001))


def directory_mask(mode: int) -> int:
    """Add the execute bit for every class that has the read bit.

    >>> oct(directory_mask(0o644))
    '0o755'
    """
    for read_bit, execute_bit in READ_IMPLIES_EXECUTE:
        if mode & read_bit:
            mode |= execute_bit
    return mode


class ModeProperty(StatProperty):
    """Mode the file should be, as an octal number."""

    NAME = "mode"
    EVENT = "inode_changed"
    ACCEPTS = frozenset({Scalar, ValueList})

    def normalize(self, value: Any) -> int:
        if isinstance(value, bool):
            raise self.invalid(value, "File modes can only be numbers")
        if isinstance(value, str):
            if not DIGITS.fullmatch(value):
                raise self.invalid(value, "File modes can only be numbers")
            if not value.startswith("0"):
                value = "0" + value
            try:
                value = int(value, 8)
            except ValueError:
                raise self.invalid(value, "not an octal number") from None
        if not isinstance(value, int):
            raise self.invalid(value, "File modes can only be numbers")
        if not 0 <= value <= PERMISSION_BITS:
            raise self.invalid(value, f"must be between 0 and {PERMISSION_BITS:o}")
        return value

    def adjust(self, desired: Desired) -> Desired | None:
        # Directories need the execute bit wherever they are readable.
        if desired is NOT_APPLICABLE:
            return desired
        stat = self.file.stat()
        if stat is None:
            return None
        if not stat.is_dir:
            return desired
        if isinstance(desired, ValueList):
            return ValueList(tuple(directory_mask(v) for v in desired.values))
        return Scalar(directory_mask(desired.value))  # type: ignore[union-attr]

    def from_stat(self, stat: FileStat) -> int:
        return stat.mode & PERMISSION_BITS

    def display(self, value: Any) -> str:
        if isinstance(value, int) and not isinstance(value, bool):
            return f"{value:o}"
        if is_missing(value):
            return repr(value)
        return str(value)

    def apply(self, target: int) -> None:
        self.filesystem.chmod(self.file.path, target)

    def describe_change(self, target: int) -> str:
        return f"chmod {self.resource.title} to {target:o}"
