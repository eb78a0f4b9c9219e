"""User directory backed by the POSIX password database."""

import pwd

from attune.interfaces.user_directory import UserDirectory, UserRecord


class PosixUserDirectory(UserDirectory):
    """Resolve users through `pwd` (``/etc/passwd``, NSS)."""

    def by_name(self, name: str) -> UserRecord | None:
        try:
            entry = pwd.getpwnam(name)
        except (KeyError, TypeError):
            return None
        return UserRecord(name=entry.pw_name, uid=entry.pw_uid)

    def by_id(self, uid: int) -> UserRecord | None:
        try:
            entry = pwd.getpwuid(uid)
        except (KeyError, TypeError, OverflowError):
            return None
        return UserRecord(name=entry.pw_name, uid=entry.pw_uid)
