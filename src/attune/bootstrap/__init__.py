"""Composition root: wire settings and adapters into a ready `Agent`."""

from .bootstrap import AppContainer, bootstrap, build_agent, build_transport

__all__ = ["AppContainer", "bootstrap", "build_agent", "build_transport"]
