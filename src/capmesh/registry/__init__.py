"""Agent registry."""

from capmesh.registry.base import Registry
from capmesh.registry.local import LocalRegistry
from capmesh.registry.lock import ReadWriteLock

__all__ = [
    "LocalRegistry",
    "ReadWriteLock",
    "Registry",
]
