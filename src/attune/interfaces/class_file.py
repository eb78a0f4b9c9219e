"""Port for recording which classes and resources the last catalog contained."""

import abc
from collections.abc import Sequence

# pylint: disable=too-few-public-methods


class ClassFile(abc.ABC):
    """Contract for persisting catalog membership for later reference."""

    @abc.abstractmethod
    def write(self, classes: Sequence[str], resources: Sequence[str]) -> None:
        """Record the applied catalog's classes and resource references.

        Args:
            classes: Class names, in catalog order.
            resources: Resource references such as ``File[/etc/motd]``.
        """
