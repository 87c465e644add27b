"""Capabilities - opaque labels for what an agent provides or needs."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NewType

Capability = NewType("Capability", str)

# Common capabilities
RESEARCH = Capability("research")
WRITING = Capability("writing")
CODING = Capability("coding")
ANALYSIS = Capability("analysis")
PLANNING = Capability("planning")


def cap(name: str) -> Capability:
    """Create a custom capability from a string."""
    return Capability(name)


def dedupe(caps: Iterable[Capability]) -> list[Capability]:
    """Return capabilities in first-seen order with duplicates removed."""
    seen: set[Capability] = set()
    result: list[Capability] = []
    for c in caps:
        if c not in seen:
            seen.add(c)
            result.append(c)
    return result
