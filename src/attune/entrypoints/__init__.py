"""Entrypoints (inbound adapters) for attune.

Expose the agent to the outside world. Parse and validate inputs, build the
application through `attune.bootstrap`, run it, and present results.

Dependency rule: may import `attune.bootstrap`, `attune.service_layer` and
`attune.interfaces`; avoid importing `attune.adapters` directly.
"""
