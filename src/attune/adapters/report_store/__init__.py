"""Report store adapters."""

from .local import LocalReportStore
from .memory import InMemoryReportStore

__all__ = ["InMemoryReportStore", "LocalReportStore"]
