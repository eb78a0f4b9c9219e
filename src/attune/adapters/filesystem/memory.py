"""In-memory filesystem for tests and dry runs.

Every platform call is recorded in `InMemoryFileSystem.calls` so tests can
assert which operations happened (and how often). Failures can be injected per
operation and path with `InMemoryFileSystem.fail_on`.
"""

from __future__ import annotations

import os
import stat as statmod
from dataclasses import dataclass

from attune.interfaces.filesystem import FileStat, FileSystem, PathLike


@dataclass
class _Entry:
    mode: int
    uid: int
    gid: int
    is_dir: bool


class InMemoryFileSystem(FileSystem):
    """FileSystem implementation that keeps entries in a dict.

    This implementation is intended for testing and development purposes only.
    """

    def __init__(self, privileged: bool = True) -> None:
        self._entries: dict[str, _Entry] = {}
        self._failures: dict[tuple[str, str], BaseException] = {}
        self.privileged = privileged
        self.calls: list[tuple[str, str, int | None]] = []

    # --- Test helpers ---

    def add_file(
        self, path: PathLike, mode: int = 0o644, uid: int = 0, gid: int = 0
    ) -> None:
        """Create (or replace) a regular file entry."""
        self._entries[os.fspath(path)] = _Entry(mode, uid, gid, is_dir=False)

    def add_directory(
        self, path: PathLike, mode: int = 0o755, uid: int = 0, gid: int = 0
    ) -> None:
        """Create (or replace) a directory entry."""
        self._entries[os.fspath(path)] = _Entry(mode, uid, gid, is_dir=True)

    def remove(self, path: PathLike) -> None:
        """Delete an entry if present."""
        self._entries.pop(os.fspath(path), None)

    def fail_on(self, operation: str, path: PathLike, error: BaseException) -> None:
        """Make `operation` (``"chmod"`` or ``"chown"``) on `path` raise `error`."""
        self._failures[(operation, os.fspath(path))] = error

    def count(self, operation: str) -> int:
        """Return how many times `operation` was called."""
        return sum(1 for op, _, _ in self.calls if op == operation)

    # --- FileSystem ---

    def stat(self, path: PathLike) -> FileStat | None:
        key = os.fspath(path)
        self.calls.append(("stat", key, None))
        if (entry := self._entries.get(key)) is None:
            return None
        file_type = statmod.S_IFDIR if entry.is_dir else statmod.S_IFREG
        return FileStat(
            mode=file_type | entry.mode,
            uid=entry.uid,
            gid=entry.gid,
            is_dir=entry.is_dir,
        )

    def chmod(self, path: PathLike, mode: int) -> None:
        self._entry_for("chmod", path, mode).mode = mode

    def chown(self, path: PathLike, uid: int) -> None:
        self._entry_for("chown", path, uid).uid = uid

    def is_privileged(self) -> bool:
        return self.privileged

    def _entry_for(self, operation: str, path: PathLike, value: int) -> _Entry:
        key = os.fspath(path)
        self.calls.append((operation, key, value))
        if (error := self._failures.get((operation, key))) is not None:
            raise error
        if (entry := self._entries.get(key)) is None:
            raise FileNotFoundError(2, "No such file or directory", key)
        return entry
