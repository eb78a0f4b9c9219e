"""Adapters (infrastructure) for attune.

Provide concrete implementations of the ports in `attune.interfaces`: the
local filesystem and POSIX user database, the HTTP catalog transport and its
on-disk cache, the SQLite state store, report and class files, plus in-memory
fakes used by tests and dry runs.

Dependency rule: may import `attune.interfaces` and `attune.domain`; neither
may import this package.
"""
