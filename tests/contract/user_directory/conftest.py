"""Fixtures for user directory contract tests."""

from collections.abc import Iterable

import pytest

from attune.adapters.user_directory.memory import InMemoryUserDirectory
from attune.adapters.user_directory.posix import PosixUserDirectory
from attune.interfaces.user_directory import UserDirectory, UserRecord


@pytest.fixture(params=["memory", "posix"])
def user_directory(request: pytest.FixtureRequest) -> Iterable[UserDirectory]:
    """Yield a user directory that knows ``root`` as uid 0.

    Supported params:
      - `"memory"` → InMemoryUserDirectory
      - `"posix"` → PosixUserDirectory over the system password database
    """
    match request.param:
        case "memory":
            yield InMemoryUserDirectory([UserRecord("root", 0)])
        case "posix":
            yield PosixUserDirectory()
        case _:
            raise ValueError(f"unknown user directory type: {request.param}")
