"""Fixtures for state store contract tests."""

from collections.abc import Callable, Iterable

import pytest

from attune.adapters.state_store import InMemoryStateStore, SqlAlchemyStateStore
from attune.interfaces.state_store import StateStore


@pytest.fixture(params=["memory", "sqlite"])
def open_state_store(
    request: pytest.FixtureRequest, tmp_path
) -> Iterable[Callable[[], StateStore]]:
    """Yield a factory opening the same underlying store on every call.

    Supported params:
      - `"memory"` → one InMemoryStateStore, returned on every call
      - `"sqlite"` → a new SqlAlchemyStateStore over one file per call
    """
    match request.param:
        case "memory":
            store = InMemoryStateStore()
            yield lambda: store
        case "sqlite":
            opened: list[SqlAlchemyStateStore] = []

            def _open() -> StateStore:
                opened.append(SqlAlchemyStateStore(tmp_path / "state.sqlite3"))
                return opened[-1]

            yield _open
            for store in opened:
                store.close()
        case _:
            raise ValueError(f"unknown state store type: {request.param}")
