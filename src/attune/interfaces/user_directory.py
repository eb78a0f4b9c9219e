"""User-directory port: resolves user names and ids."""

import abc
from dataclasses import dataclass

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class UserRecord:
    """A user entry as returned by the directory.

    `uid` is None when the directory hands back a malformed record (an empty
    uid field); such records are treated as if the user did not exist.
    """

    name: str
    uid: int | None


class UserDirectory(abc.ABC):
    """Contract for looking up users by name or id."""

    @abc.abstractmethod
    def by_name(self, name: str) -> UserRecord | None:
        """Look up a user by name.

        Returns:
            UserRecord | None: The record, or None if no such user exists.
        """

    @abc.abstractmethod
    def by_id(self, uid: int) -> UserRecord | None:
        """Look up a user by numeric id.

        Returns:
            UserRecord | None: The record, or None if no such user exists.
        """
