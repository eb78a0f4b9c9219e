"""Pre- and post-run command hooks."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable, Sequence
from typing import Any

logger = logging.getLogger(__name__)

type CommandRunner = Callable[[Sequence[str]], Any]


class HookFailure(Exception):
    """Raised when a configured hook command cannot be run or exits non-zero.

    Attributes:
        setting (str): The setting the command came from, e.g. ``postrun_command``.
    """

    def __init__(self, setting: str, detail: object) -> None:
        super().__init__(f"Could not run command from {setting}: {detail}")
        self.setting = setting


def run_command(argv: Sequence[str]) -> None:
    """Run a hook command, raising on a non-zero exit status."""
    subprocess.run(argv, check=True)


def execute_from_setting(
    setting: str, command: str, runner: CommandRunner = run_command
) -> None:
    """Run the hook `command` configured under `setting`.

    An empty command does nothing. The command line is split shell-style but
    not run through a shell.

    Raises:
        HookFailure: If the command cannot be parsed, started, or fails.
    """
    if not command:
        return
    try:
        argv = shlex.split(command)
        logger.debug("Running %s: %s", setting, argv)
        runner(argv)
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        raise HookFailure(setting, e) from e
