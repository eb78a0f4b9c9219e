"""State store adapters."""

from .memory import InMemoryStateStore
from .sqlalchemy_adapter import SqlAlchemyStateStore

__all__ = ["InMemoryStateStore", "SqlAlchemyStateStore"]
