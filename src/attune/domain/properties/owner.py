"""File ownership.

The desired owner may be a user name or a numeric uid. Names are resolved
through the `UserDirectory` port; a name that does not resolve yet is kept
as-is because the user may be created later in the same run.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from attune.domain.values import NOT_APPLICABLE, is_missing

from .base import StatProperty

if TYPE_CHECKING:
    from attune.interfaces.filesystem import FileStat

logger = logging.getLogger(__name__)

NUMERIC_ID = re.compile(r"[0-9]+")

UNPRIVILEGED_NOTICE = ("owner", "unprivileged")
MISSING_USER_NOTICE = "owner.missing-user"


class OwnerProperty(StatProperty):
    """To whom the file should belong: a user name or user ID."""

    NAME = "owner"
    EVENT = "inode_changed"

    # --- User resolution ---

    def name_for(self, uid: int) -> str | None:
        """Resolve a uid to a user name, or None if it is not a valid user."""
        record = self.context.users.by_id(uid)
        if record is None or record.uid is None:
            return None
        return record.name

    def uid_for(self, value: int | str) -> int | None:
        """Resolve a name or uid to a valid uid, or None if no such user exists."""
        if isinstance(value, str) and NUMERIC_ID.fullmatch(value):
            value = int(value)
        if isinstance(value, int):
            return value if self.name_for(value) is not None else None
        record = self.context.users.by_name(value)
        if record is None or record.uid is None:
            return None
        return record.uid

    # --- Property protocol ---

    def normalize(self, value: Any) -> int | str:
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise self.invalid(value, "owner must be a user name or uid")
        if isinstance(value, int) and value < 0:
            raise self.invalid(value, "uid cannot be negative")
        if isinstance(value, str) and not value.strip():
            raise self.invalid(value, "owner cannot be empty")

        if (uid := self.uid_for(value)) is not None:
            return uid
        if isinstance(value, str) and NUMERIC_ID.fullmatch(value):
            return int(value)
        return value

    def from_stat(self, stat: FileStat) -> int:
        return stat.uid

    def matches(self, current: Any, desired: Any) -> bool:
        if isinstance(desired, int):
            return current == desired
        uid = self.uid_for(desired)
        return uid is not None and current == uid

    def display(self, value: Any) -> str:
        if is_missing(value):
            return repr(value)
        if isinstance(value, int):
            return self.name_for(value) or str(value)
        return str(value)

    def precondition(self) -> bool:
        if not self.filesystem.is_privileged():
            if self.context.notices.first(UNPRIVILEGED_NOTICE):
                logger.warning("Cannot manage ownership unless running as root")
            return False

        should = self.should
        if should is NOT_APPLICABLE:
            return True
        desired = should.value  # type: ignore[union-attr]
        if self.uid_for(desired) is None:
            if self.context.notices.first((MISSING_USER_NOTICE, desired)):
                logger.warning("%s: user %s does not exist", self.label, desired)
            return False
        return True

    def apply(self, target: int | str) -> None:
        uid = self.uid_for(target)
        if uid is None:
            raise LookupError(f"user {target} does not exist")
        self.filesystem.chown(self.file.path, uid)

    def actual_after(self, target: int | str) -> int | str:
        uid = self.uid_for(target)
        return target if uid is None else uid

    def describe_change(self, target: int | str) -> str:
        return f"set owner of {self.resource.title} to {self.display(target)}"
