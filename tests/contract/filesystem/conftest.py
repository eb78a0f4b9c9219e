"""Fixtures for filesystem contract tests."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import pytest

from attune.adapters.filesystem.local import LocalFileSystem
from attune.adapters.filesystem.memory import InMemoryFileSystem
from attune.interfaces.filesystem import FileSystem


@dataclass
class FileSystemRig:
    """A filesystem adapter plus a way to create entries behind its back."""

    fs: FileSystem
    root: Path
    uid: int
    backend: str

    def create_file(self, name: str, mode: int) -> Path:
        """Create a regular file under `root` with permission bits `mode`."""
        path = self.root / name
        if isinstance(self.fs, InMemoryFileSystem):
            self.fs.add_file(path, mode=mode, uid=self.uid)
        else:
            path.write_text("", encoding="utf-8")
            os.chmod(path, mode)
        return path

    def create_directory(self, name: str, mode: int) -> Path:
        """Create a directory under `root` with permission bits `mode`."""
        path = self.root / name
        if isinstance(self.fs, InMemoryFileSystem):
            self.fs.add_directory(path, mode=mode, uid=self.uid)
        else:
            path.mkdir()
            os.chmod(path, mode)
        return path


@pytest.fixture(params=["memory", "local"])
def fs_rig(request: pytest.FixtureRequest, tmp_path: Path) -> Iterable[FileSystemRig]:
    """Yield a `FileSystemRig` for the requested backend.

    Supported params:
      - `"memory"` → InMemoryFileSystem
      - `"local"` → LocalFileSystem over `tmp_path`
    """
    match request.param:
        case "memory":
            yield FileSystemRig(InMemoryFileSystem(), tmp_path, os.getuid(), "memory")
        case "local":
            yield FileSystemRig(LocalFileSystem(), tmp_path, os.getuid(), "local")
        case _:
            raise ValueError(f"unknown filesystem type: {request.param}")
