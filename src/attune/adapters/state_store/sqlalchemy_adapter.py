"""State store persisted in a SQLite file through SQLAlchemy."""

from __future__ import annotations

import datetime
import logging
import os
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import DBAPIError

from attune.adapters.db.engine import make_engine, sqlite_url
from attune.adapters.db.metadata import metadata
from attune.interfaces.state_store import StateCorruptionError, StateStore

from .schema import state

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

# Errors that mean "this file is not a usable state database".
_UNREADABLE = (DBAPIError, sqlite3.DatabaseError, ValueError)


class SqlAlchemyStateStore(StateStore):
    """StateStore implementation backed by a SQLite database file.

    A file that cannot be read is discarded and recreated once. If the fresh
    file cannot be read either, `load` raises `StateCorruptionError`.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._engine: Engine | None = None
        self._sections: dict[str, dict[str, Any]] = {}

    # --- StateStore ---

    def load(self) -> None:
        try:
            self._sections = self._read()
            return
        except _UNREADABLE as e:
            logger.warning(
                "State file %s is unreadable (%s); discarding it", self.path, e
            )

        try:
            self._discard()
            self._sections = self._read()
        except (*_UNREADABLE, OSError) as e:
            self.close()
            raise StateCorruptionError(str(self.path), str(e)) from e

    def cache(self, section: str) -> dict[str, Any]:
        return self._sections.setdefault(section, {})

    def save(self) -> None:
        now = datetime.datetime.now(datetime.timezone.utc)
        with self._connect().begin() as conn:
            for section, data in self._sections.items():
                stmt = sqlite_insert(state).values(
                    section=section, data=data, updated_at=now
                )
                conn.execute(
                    stmt.on_conflict_do_update(
                        index_elements=[state.c.section],
                        set_={"data": stmt.excluded.data, "updated_at": now},
                    )
                )

    # --- helpers ---

    def close(self) -> None:
        """Release pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def _connect(self) -> Engine:
        if self._engine is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._engine = make_engine(sqlite_url(self.path))
        return self._engine

    def _read(self) -> dict[str, dict[str, Any]]:
        engine = self._connect()
        metadata.create_all(engine, tables=[state])
        sections: dict[str, dict[str, Any]] = {}
        with engine.connect() as conn:
            for row in conn.execute(select(state.c.section, state.c.data)):
                if not isinstance(row.data, dict):
                    raise ValueError(f"section {row.section!r} is not an object")
                sections[row.section] = row.data
        return sections

    def _discard(self) -> None:
        self.close()
        for suffix in ("", "-wal", "-shm", "-journal"):
            Path(f"{self.path}{suffix}").unlink(missing_ok=True)
