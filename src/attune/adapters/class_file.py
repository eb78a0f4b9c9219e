"""Class and resource membership files."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from attune.adapters.atomic import write_text_atomic
from attune.interfaces.class_file import ClassFile


def _lines(items: Sequence[str]) -> str:
    return "".join(f"{item}\n" for item in items)


class LocalClassFile(ClassFile):
    """Write class names and resource references, one per line."""

    def __init__(
        self,
        classfile: str | os.PathLike[str],
        resourcefile: str | os.PathLike[str],
    ) -> None:
        self.classfile = Path(classfile)
        self.resourcefile = Path(resourcefile)

    def write(self, classes: Sequence[str], resources: Sequence[str]) -> None:
        write_text_atomic(self.classfile, _lines(classes))
        write_text_atomic(self.resourcefile, _lines([r.lower() for r in resources]))


class InMemoryClassFile(ClassFile):
    """Remember the last membership written."""

    def __init__(self) -> None:
        self.classes: list[str] = []
        self.resources: list[str] = []
        self.writes = 0

    def write(self, classes: Sequence[str], resources: Sequence[str]) -> None:
        self.classes = list(classes)
        self.resources = list(resources)
        self.writes += 1
