"""capmesh - capability-based delegation mesh for task-executing agents."""

__version__ = "0.1.0"

from capmesh.core import (
    AgentNotFoundError,
    Capability,
    CycleDetectedError,
    DelegationError,
    ExecutionContext,
    HopBudgetExceededError,
    MeshError,
    NoProviderAvailableError,
    ProviderExecutionError,
    RegistrationError,
    Result,
    cap,
    new_context,
)
from capmesh.mesh import (
    CycleDetector,
    FirstBalancer,
    Injector,
    Mesh,
    RandomBalancer,
    RoundRobinBalancer,
)
from capmesh.registry import LocalRegistry

__all__ = [
    "__version__",
    "AgentNotFoundError",
    "Capability",
    "CycleDetectedError",
    "CycleDetector",
    "DelegationError",
    "ExecutionContext",
    "FirstBalancer",
    "HopBudgetExceededError",
    "Injector",
    "LocalRegistry",
    "Mesh",
    "MeshError",
    "NoProviderAvailableError",
    "ProviderExecutionError",
    "RandomBalancer",
    "RegistrationError",
    "Result",
    "RoundRobinBalancer",
    "cap",
    "new_context",
]
