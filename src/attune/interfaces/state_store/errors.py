"""Exceptions for the persisted cross-cycle state store."""


class StateStoreError(Exception):
    """Base class for state store errors."""


class StateCorruptionError(StateStoreError):
    """The state file could not be read, even after discarding it once.

    Attributes:
        location (str): Where the state lives (a file path for file-backed stores).
    """

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Cannot load state from {location}: {reason}")
        self.location = location
        self.reason = reason
