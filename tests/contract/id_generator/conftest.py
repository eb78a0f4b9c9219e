"""Fixtures for id_generator contract tests."""

from collections.abc import Iterable

import pytest

from attune.adapters.id_generators import SimpleIdGenerator, ULIDGenerator
from attune.interfaces.id_generator import IdGenerator


@pytest.fixture(params=["ulid", "simple"])
def id_generator(
    request: pytest.FixtureRequest,
) -> Iterable[IdGenerator]:
    """Return a fresh IdGenerator instance for the requested backend.

    Supported params:
      - `"ulid"` → ULIDGenerator
      - `"simple"` → SimpleIdGenerator
    """

    match request.param:
        case "ulid":
            yield ULIDGenerator()
        case "simple":
            yield SimpleIdGenerator()
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")
