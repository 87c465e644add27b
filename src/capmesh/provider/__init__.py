"""Model providers for the reference agent."""

from capmesh.provider.base import (
    ChatRequest,
    ChatResponse,
    Provider,
    StopReason,
    ToolDefinition,
    Usage,
)
from capmesh.provider.mock import MockProvider

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "MockProvider",
    "Provider",
    "StopReason",
    "ToolDefinition",
    "Usage",
]
