"""Domain layer for attune.

Contains the convergence rules: properties and their reconciliation state
machine, resources, the applied catalog, and the run report. This package is
deliberately technology-agnostic; every platform call goes through a port from
`attune.interfaces`.

Dependency rule: do not import from `attune.adapters`, `attune.service_layer`
or `attune.entrypoints`.
"""
