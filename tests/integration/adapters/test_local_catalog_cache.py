"""Integration tests for the on-disk catalog cache."""

from __future__ import annotations

import json

import pytest

from attune.adapters.catalog import LocalCatalogCache
from attune.interfaces.catalog import FindOptions, MalformedCatalogError, TransportError

NODE = "web01.example.com"
CACHED = FindOptions(ignore_terminus=True)


def test_writes_pretty_json_without_leftovers(tmp_path, make_wire_catalog):
    cache = LocalCatalogCache(tmp_path / "catalog")

    cache.save(make_wire_catalog(("/etc/motd", {"mode": "644"})))

    files = sorted(p.name for p in (tmp_path / "catalog").iterdir())
    assert files == [f"{NODE}.json"]
    document = json.loads((tmp_path / "catalog" / f"{NODE}.json").read_text())
    assert document["resources"][0]["title"] == "/etc/motd"


@pytest.mark.parametrize("node", ["", ".", "..", "../etc/passwd", "a\\b"])
def test_rejects_names_that_are_not_file_names(tmp_path, node):
    cache = LocalCatalogCache(tmp_path)
    with pytest.raises(TransportError, match="not a valid file name"):
        cache.find(node, CACHED)


def test_unreadable_json(tmp_path):
    (tmp_path / f"{NODE}.json").write_text("{", encoding="utf-8")
    with pytest.raises(TransportError, match="is not JSON"):
        LocalCatalogCache(tmp_path).find(NODE, CACHED)


def test_wrong_document_shape(tmp_path):
    (tmp_path / f"{NODE}.json").write_text('{"name": 3}', encoding="utf-8")
    with pytest.raises(MalformedCatalogError):
        LocalCatalogCache(tmp_path).find(NODE, CACHED)


def test_cache_path_is_a_directory(tmp_path):
    (tmp_path / f"{NODE}.json").mkdir()
    with pytest.raises(TransportError, match="cannot read"):
        LocalCatalogCache(tmp_path).find(NODE, CACHED)
