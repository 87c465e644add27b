"""Agent wrappers layered on top of the core."""

from capmesh.middleware.logging import LoggingAgent, with_logging

__all__ = [
    "LoggingAgent",
    "with_logging",
]
