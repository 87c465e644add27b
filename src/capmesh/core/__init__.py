"""Core types shared by every part of the mesh."""

from capmesh.core.capability import (
    ANALYSIS,
    CODING,
    PLANNING,
    RESEARCH,
    WRITING,
    Capability,
    cap,
    dedupe,
)
from capmesh.core.context import ExecutionContext, new_context
from capmesh.core.errors import (
    AgentConfigurationError,
    AgentNotFoundError,
    CycleDetectedError,
    DelegationError,
    HopBudgetExceededError,
    InvalidToolInputError,
    MaxTurnsExceededError,
    MeshError,
    NoProviderAvailableError,
    ProviderExecutionError,
    RegistrationError,
    ToolNotFoundError,
)
from capmesh.core.types import (
    Agent,
    Message,
    Result,
    Role,
    Tool,
    ToolCall,
    ToolHost,
    ToolResult,
)

__all__ = [
    # Capabilities
    "ANALYSIS",
    "CODING",
    "PLANNING",
    "RESEARCH",
    "WRITING",
    "Capability",
    "cap",
    "dedupe",
    # Context
    "ExecutionContext",
    "new_context",
    # Errors
    "AgentConfigurationError",
    "AgentNotFoundError",
    "CycleDetectedError",
    "DelegationError",
    "HopBudgetExceededError",
    "InvalidToolInputError",
    "MaxTurnsExceededError",
    "MeshError",
    "NoProviderAvailableError",
    "ProviderExecutionError",
    "RegistrationError",
    "ToolNotFoundError",
    # Contracts
    "Agent",
    "Message",
    "Result",
    "Role",
    "Tool",
    "ToolCall",
    "ToolHost",
    "ToolResult",
]
