"""Global pytest fixtures for attune."""

pytest_plugins = [
    "tests.fixtures.reconcile",
    "tests.fixtures.catalogs",
    "tests.fixtures.agent",
]
