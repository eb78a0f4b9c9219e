"""State store interfaces."""

from .errors import StateCorruptionError, StateStoreError
from .state_store import StateStore

__all__ = ["StateCorruptionError", "StateStore", "StateStoreError"]
