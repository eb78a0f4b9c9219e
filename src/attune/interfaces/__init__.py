"""Interfaces (application boundary) for attune.

Defines framework-free application contracts: ABCs and small DTOs shared by
the domain, the service layer and the adapters (catalog transport, fact
source, user directory, filesystem, state store, report store, class file,
plugin sync, ID generators). Business rules stay out of this package.

Dependency rule: this package is independent; do not import from any other
`attune.*` modules at runtime (domain types may appear in annotations under
``TYPE_CHECKING``). It may be imported by `attune.domain`,
`attune.service_layer`, `attune.adapters`, and `attune.bootstrap`.
"""
