"""State store schema.

One row per state section; ``data`` holds the section's JSON object.
"""

from sqlalchemy import JSON, Column, String, Table

from attune.adapters.db.metadata import metadata
from attune.adapters.db.sa_types import UTCDateTime

__all__ = ["state"]

state = Table(
    "state",
    metadata,
    Column("section", String(200), primary_key=True, comment="Section name."),
    Column("data", JSON(none_as_null=True), nullable=False, comment="Section content."),
    Column(
        "updated_at",
        UTCDateTime(),
        nullable=False,
        comment="When the section was last saved (UTC).",
    ),
)
