"""Composition patterns built on the agent contract."""

from capmesh.patterns.parallel import Parallel, join_outputs
from capmesh.patterns.sequential import Sequential

__all__ = [
    "Parallel",
    "Sequential",
    "join_outputs",
]
