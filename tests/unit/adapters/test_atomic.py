"""Tests for atomic text file replacement."""

import pytest

from attune.adapters.atomic import write_text_atomic


def test_creates_parents_and_replaces(tmp_path):
    dest = tmp_path / "a" / "b" / "file.txt"

    assert write_text_atomic(dest, "one") == dest
    write_text_atomic(dest, "two")

    assert dest.read_text(encoding="utf-8") == "two"
    assert [p.name for p in dest.parent.iterdir()] == ["file.txt"]


def test_failed_replace_leaves_no_temporary_file(tmp_path):
    dest = tmp_path / "dir"
    dest.mkdir()
    (dest / "occupant").touch()

    with pytest.raises(OSError):
        write_text_atomic(dest, "text")

    assert sorted(p.name for p in tmp_path.iterdir()) == ["dir"]
