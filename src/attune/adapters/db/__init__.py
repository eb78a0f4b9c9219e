"""SQLAlchemy plumbing shared by database-backed adapters."""
