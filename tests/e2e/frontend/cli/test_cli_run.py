"""End-to-end tests for ``attune run``.

Each test runs the real command against files in an isolated directory,
with the flight recorder disabled and state kept under ``./state``.
"""

import json
import os
import stat
from pathlib import Path

import pytest

from attune.entrypoints.cli.main import attune

# pylint: disable=unused-argument

NODE = "web01.example.com"
BASE = ["--no-flight-recorder", "run", "--certname", NODE, "--statedir", "state"]


def _mode(path: str) -> int:
    return stat.S_IMODE(os.stat(path).st_mode)


def _touch(path: str, mode: int) -> None:
    Path(path).write_text("", encoding="utf-8")
    os.chmod(path, mode)


def test_applies_local_catalog(runner, write_catalog):
    _touch("app.conf", 0o644)
    catalog = write_catalog(("app.conf", {"mode": "600"}))

    result = runner.invoke(attune, BASE + ["--catalog", catalog])

    assert result.exit_code == 0, result.output
    assert _mode("app.conf") == 0o600
    assert "finished: changed" in result.output
    (report_file,) = Path("state/reports", NODE).glob("*.json")
    report = json.loads(report_file.read_text(encoding="utf-8"))
    assert report["status"] == "changed"
    assert report["host"] == NODE
    assert not Path("state/classes.txt").exists()


def test_detailed_exit_codes(runner, write_catalog):
    _touch("app.conf", 0o644)
    catalog = write_catalog(("app.conf", {"mode": "0640"}))
    args = BASE + ["--catalog", catalog, "--detailed-exitcodes", "--no-report"]

    first = runner.invoke(attune, args)
    second = runner.invoke(attune, args)

    assert first.exit_code == 4, first.output
    assert second.exit_code == 0, second.output
    assert not Path("state/reports").exists()


def test_failed_resources_exit_2(runner, write_catalog):
    _touch("app.conf", 0o644)
    catalog = write_catalog(("app.conf", {"owner": ["root", "nobody"]}))

    result = runner.invoke(attune, BASE + ["--catalog", catalog, "--detailed-exitcodes"])

    assert result.exit_code == 2, result.output
    assert "1 resource(s) failed" in result.output


def test_summarize_prints_metrics(runner, write_catalog):
    _touch("app.conf", 0o600)
    catalog = write_catalog(("app.conf", {"mode": "600"}))

    result = runner.invoke(attune, BASE + ["--catalog", catalog, "--summarize"])

    assert result.exit_code == 0, result.output
    assert "Resources:" in result.output
    assert "Total: 1" in result.output


def test_applies_cached_catalog_without_server(runner, write_catalog):
    _touch("app.conf", 0o644)
    cache_dir = Path("state/client_data/catalog")
    cache_dir.mkdir(parents=True)
    write_catalog(("app.conf", {"mode": "640"}), filename=str(cache_dir / f"{NODE}.json"))

    result = runner.invoke(attune, ["-v"] + BASE + ["--detailed-exitcodes"])

    assert result.exit_code == 4, result.output
    assert "Using cached catalog" in result.output
    assert _mode("app.conf") == 0o640
    assert Path("state/classes.txt").read_text(encoding="utf-8") == "base\n"
    assert Path("state/resources.txt").read_text(encoding="utf-8") == (
        f"file[{Path('app.conf').resolve()}]\n".lower()
    )


def test_no_catalog_anywhere_skips_run(runner, fs):
    result = runner.invoke(attune, BASE)

    assert result.exit_code == 0, result.output
    assert "Could not retrieve catalog; skipping run" in result.output
    assert len(list(Path("state/reports", NODE).glob("*.json"))) == 1


def test_no_cache_on_failure(runner, write_catalog):
    cache_dir = Path("state/client_data/catalog")
    cache_dir.mkdir(parents=True)
    write_catalog(filename=str(cache_dir / f"{NODE}.json"))

    result = runner.invoke(attune, BASE + ["--no-use-cache-on-failure"])

    assert result.exit_code == 0, result.output
    assert "Not using cache on failed catalog" in result.output


def test_prerun_and_postrun_commands(runner, write_catalog):
    catalog = write_catalog()
    args = BASE + [
        "--catalog",
        catalog,
        "--prerun-command",
        "touch pre.flag",
        "--postrun-command",
        "touch post.flag",
    ]

    result = runner.invoke(attune, args)

    assert result.exit_code == 0, result.output
    assert Path("pre.flag").exists() and Path("post.flag").exists()


def test_failing_postrun_command_exits_1(runner, write_catalog):
    catalog = write_catalog()

    result = runner.invoke(
        attune, BASE + ["--catalog", catalog, "--postrun-command", "false"]
    )

    assert result.exit_code == 1
    assert "Could not run command from postrun_command" in result.output
    assert len(list(Path("state/reports", NODE).glob("*.json"))) == 1


@pytest.mark.parametrize(
    ("args", "hint"),
    [
        (["--timeout", "abc"], "--timeout"),
        (["--timeout", "0"], "--timeout"),
        (["--server", "config.example.com"], "--server"),
    ],
)
def test_invalid_settings_are_usage_errors(runner, fs, args, hint):
    result = runner.invoke(attune, BASE + args)

    assert result.exit_code == 2
    assert hint in result.output


def test_unreadable_catalog_exits_1(runner, fs):
    Path("catalog.json").write_text("{not json", encoding="utf-8")

    result = runner.invoke(attune, BASE + ["--catalog", "catalog.json"])

    assert result.exit_code == 1
    assert "Cannot load catalog catalog.json" in result.output


def test_catalog_with_unknown_type_exits_1(runner, fs):
    Path("catalog.json").write_text(
        json.dumps(
            {"name": NODE, "resources": [{"type": "package", "title": "nginx"}]}
        ),
        encoding="utf-8",
    )

    result = runner.invoke(attune, BASE + ["--catalog", "catalog.json"])

    assert result.exit_code == 1
    assert "Unknown resource type 'package'" in result.output


def test_settings_from_environment(runner, write_catalog):
    _touch("app.conf", 0o644)
    catalog = write_catalog(("app.conf", {"mode": "600"}))

    result = runner.invoke(
        attune,
        ["--no-flight-recorder", "run", "--catalog", catalog],
        env={"ATTUNE_CERTNAME": NODE, "ATTUNE_STATEDIR": "envstate", "ATTUNE_REPORT": "0"},
    )

    assert result.exit_code == 0, result.output
    assert Path("envstate/state.sqlite3").exists()
    assert not Path("envstate/reports").exists()


def test_version(runner):
    result = runner.invoke(attune, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
