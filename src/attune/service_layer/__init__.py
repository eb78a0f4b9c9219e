"""Service layer for attune.

Orchestrates one agent cycle over the domain: acquire a catalog, apply it
resource by resource, and report. Collaborators arrive through the ports in
`attune.interfaces`; concrete adapters are chosen by `attune.bootstrap`.
"""
