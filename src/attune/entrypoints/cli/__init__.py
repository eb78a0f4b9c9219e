"""Command-line interface for attune."""
