"""Filesystem adapter backed by the operating system."""

import os
import stat as statmod

from attune.interfaces.filesystem import FileStat, FileSystem, PathLike


class LocalFileSystem(FileSystem):
    """FileSystem implementation that calls the OS directly."""

    def stat(self, path: PathLike) -> FileStat | None:
        try:
            result = os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            return None
        return FileStat(
            mode=result.st_mode,
            uid=result.st_uid,
            gid=result.st_gid,
            is_dir=statmod.S_ISDIR(result.st_mode),
        )

    def chmod(self, path: PathLike, mode: int) -> None:
        os.chmod(path, mode)

    def chown(self, path: PathLike, uid: int) -> None:
        # -1 leaves the group unchanged
        os.chown(path, uid, -1)

    def is_privileged(self) -> bool:
        return os.geteuid() == 0
