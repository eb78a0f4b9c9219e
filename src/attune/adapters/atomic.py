"""Atomic file replacement shared by the file-backed adapters."""

import os
import tempfile
from pathlib import Path


def write_text_atomic(path: str | os.PathLike[str], text: str) -> Path:
    """Write `text` to `path` so readers see either the old or the new content.

    The content goes to a temporary file in the destination directory which is
    then moved over `path` with `os.replace`.

    Returns:
        Path: The destination path.
    """
    dest = Path(path)
    dest.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", dir=dest.parent, prefix=f".{dest.name}.", delete=False, encoding="utf-8"
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(text)
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        os.replace(tmp_path, dest)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return dest
