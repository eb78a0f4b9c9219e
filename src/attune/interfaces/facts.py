"""Fact source port: the node's facts, serialized for upload with a catalog request."""

import abc
from dataclasses import dataclass

# pylint: disable=too-few-public-methods


@dataclass(frozen=True)
class FactPayload:
    """Serialized facts tagged with their encoding.

    Consumed opaquely by catalog acquisition; only the transport looks inside.
    """

    format: str
    payload: str

    def as_form(self) -> dict[str, str]:
        """Form fields sent alongside a catalog request."""
        return {"facts_format": self.format, "facts": self.payload}


class FactSource(abc.ABC):
    """Contract for something that can describe the local node."""

    @abc.abstractmethod
    def facts_for_uploading(self) -> FactPayload:
        """Collect and serialize the node's facts."""
