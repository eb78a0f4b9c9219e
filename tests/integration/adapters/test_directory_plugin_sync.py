"""Integration tests for mirroring plugins from a source directory."""

import os

import pytest

from attune.adapters.plugin_sync import DirectoryPluginSync

# pylint: disable=redefined-outer-name


@pytest.fixture
def source(tmp_path):
    """A plugin source with two plugins and one fact script."""
    root = tmp_path / "source"
    (root / "plugins" / "types").mkdir(parents=True)
    (root / "plugins" / "types" / "service.py").write_text("# service\n")
    (root / "plugins" / "helpers.py").write_text("# helpers\n")
    (root / "facts.d").mkdir()
    (root / "facts.d" / "site.json").write_text("{}\n")
    return root


def test_copies_plugins_and_fact_plugins(source, tmp_path):
    sync = DirectoryPluginSync(source, tmp_path / "dest")

    assert sync.download_plugins() == ["helpers.py", "types/service.py"]
    assert sync.download_fact_plugins() == ["site.json"]
    assert (tmp_path / "dest" / "lib" / "types" / "service.py").read_text() == "# service\n"
    assert (tmp_path / "dest" / "facts.d" / "site.json").is_file()


def test_unchanged_files_are_not_copied_again(source, tmp_path):
    sync = DirectoryPluginSync(source, tmp_path / "dest")
    sync.download_plugins()

    assert sync.download_plugins() == []


def test_changed_files_are_copied_again(source, tmp_path):
    sync = DirectoryPluginSync(source, tmp_path / "dest")
    sync.download_plugins()
    helper = source / "plugins" / "helpers.py"
    helper.write_text("# helpers, version two\n")
    os.utime(helper, (0, 0))

    assert sync.download_plugins() == ["helpers.py"]
    assert (tmp_path / "dest" / "lib" / "helpers.py").read_text() == "# helpers, version two\n"


def test_missing_source_syncs_nothing(tmp_path):
    sync = DirectoryPluginSync(tmp_path / "nowhere", tmp_path / "dest")

    assert sync.download_plugins() == []
    assert sync.download_fact_plugins() == []
    assert not (tmp_path / "dest").exists()
