"""Filesystem port used by file properties."""

import abc
import os
from dataclasses import dataclass

PathLike = str | os.PathLike[str]


@dataclass(frozen=True)
class FileStat:
    """The subset of ``stat`` results properties care about."""

    mode: int
    uid: int
    gid: int
    is_dir: bool


class FileSystem(abc.ABC):
    """Contract for the platform calls made while converging files."""

    @abc.abstractmethod
    def stat(self, path: PathLike) -> FileStat | None:
        """Stat a path, following symlinks.

        Args:
            path: The path to inspect.

        Returns:
            FileStat | None: The stat result, or None if nothing exists at `path`.
        """

    @abc.abstractmethod
    def chmod(self, path: PathLike, mode: int) -> None:
        """Set the permission bits of `path`.

        Raises:
            OSError: If the platform call fails.
        """

    @abc.abstractmethod
    def chown(self, path: PathLike, uid: int) -> None:
        """Change the owning user of `path`, leaving the group unchanged.

        Raises:
            OSError: If the platform call fails.
        """

    @abc.abstractmethod
    def is_privileged(self) -> bool:
        """Return True if the process may change file ownership."""
