"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits structured log
messages, plus fixtures to register that command, obtain a CliRunner, run
tests within an isolated filesystem and write catalog files.
"""

import json
import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from attune.entrypoints.cli.main import attune

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit representative log messages for CLI/flight-recorder tests.

    Emits DEBUG/INFO/WARNING/ERROR/CRITICAL messages on the 'attune.demo'
    logger and additional messages on a 'some.thirdparty' logger to exercise
    logger-level filtering and flight-recorder behavior.
    """
    logger = logging.getLogger("attune.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and its internal sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command for the duration of a test."""
    attune.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(attune, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def write_catalog(fs):
    """Write a catalog document into the isolated filesystem.

    Resources are ``(path, parameters)`` pairs of file resources; paths are
    made absolute. Returns the catalog file name.
    """

    def _write(*files, name="web01.example.com", filename="catalog.json") -> str:
        document = {
            "name": name,
            "version": 1700000000,
            "classes": ["base"],
            "resources": [
                {"type": "file", "title": str(Path(path).resolve()), "parameters": params}
                for path, params in files
            ],
        }
        Path(filename).write_text(json.dumps(document), encoding="utf-8")
        return filename

    return _write
