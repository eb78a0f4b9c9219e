"""User directory adapters."""
