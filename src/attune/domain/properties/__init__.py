"""Reconcilable properties and the context they run in."""

from .base import Property, ReconcileContext, StatProperty
from .mode import ModeProperty, directory_mask
from .owner import OwnerProperty

__all__ = [
    "ModeProperty",
    "OwnerProperty",
    "Property",
    "ReconcileContext",
    "StatProperty",
    "directory_mask",
]
