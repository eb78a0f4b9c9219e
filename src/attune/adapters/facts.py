"""Fact sources: describe the local node for catalog compilation."""

from __future__ import annotations

import json
import os
import platform
import socket
from collections.abc import Mapping
from typing import Any

from attune.interfaces.facts import FactPayload, FactSource

# pylint: disable=too-few-public-methods

FACTS_FORMAT = "json"


def _encode(facts: Mapping[str, Any]) -> FactPayload:
    return FactPayload(FACTS_FORMAT, json.dumps(dict(facts), sort_keys=True))


class SystemFactSource(FactSource):
    """Collect a small set of facts from the running system.

    Args:
        certname: The node name; reported as the ``clientcert`` fact.
        extra: Additional facts merged over the collected ones.
    """

    def __init__(self, certname: str, extra: Mapping[str, Any] | None = None) -> None:
        self.certname = certname
        self.extra = dict(extra or {})

    def collect(self) -> dict[str, Any]:
        """Return the raw facts as a dict."""
        uname = platform.uname()
        facts: dict[str, Any] = {
            "clientcert": self.certname,
            "hostname": uname.node.split(".")[0],
            "fqdn": socket.getfqdn(),
            "kernel": uname.system,
            "kernelrelease": uname.release,
            "architecture": uname.machine,
            "python_version": platform.python_version(),
        }
        if hasattr(os, "geteuid"):
            facts["identity"] = {"uid": os.geteuid(), "privileged": os.geteuid() == 0}
        facts.update(self.extra)
        return facts

    def facts_for_uploading(self) -> FactPayload:
        return _encode(self.collect())


class StaticFactSource(FactSource):
    """Serve a fixed set of facts."""

    def __init__(self, facts: Mapping[str, Any] | None = None) -> None:
        self.facts = dict(facts or {})

    def facts_for_uploading(self) -> FactPayload:
        return _encode(self.facts)
