"""attune

A configuration-management agent. It fetches a desired-state catalog for this
node from a remote authority, converges local resources towards it property by
property, and reports exactly what changed.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
