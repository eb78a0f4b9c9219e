"""In-memory user directory for tests."""

from attune.interfaces.user_directory import UserDirectory, UserRecord


class InMemoryUserDirectory(UserDirectory):
    """UserDirectory implementation holding a fixed set of records.

    Records with ``uid=None`` model malformed directory entries.
    """

    def __init__(self, records: list[UserRecord] | None = None) -> None:
        self._records: list[UserRecord] = list(records or [])

    def add(self, name: str, uid: int | None) -> None:
        """Register a user."""
        self._records.append(UserRecord(name=name, uid=uid))

    def by_name(self, name: str) -> UserRecord | None:
        return next((r for r in self._records if r.name == name), None)

    def by_id(self, uid: int) -> UserRecord | None:
        return next((r for r in self._records if r.uid == uid), None)
