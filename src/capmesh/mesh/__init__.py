"""Delegation mesh: selection, cycle detection, tool injection and the facade."""

from capmesh.mesh.balancer import (
    Balancer,
    BalancerKind,
    FirstBalancer,
    RandomBalancer,
    RoundRobinBalancer,
    new_balancer,
)
from capmesh.mesh.cycle import DEFAULT_MAX_HOPS, CycleDetector
from capmesh.mesh.injector import (
    TOOL_NAME_PREFIX,
    AgentTool,
    DelegationRequest,
    Injector,
    describe_tools,
)
from capmesh.mesh.mesh import Mesh, new_mesh

__all__ = [
    "DEFAULT_MAX_HOPS",
    "TOOL_NAME_PREFIX",
    "AgentTool",
    "Balancer",
    "BalancerKind",
    "CycleDetector",
    "DelegationRequest",
    "FirstBalancer",
    "Injector",
    "Mesh",
    "RandomBalancer",
    "RoundRobinBalancer",
    "describe_tools",
    "new_balancer",
    "new_mesh",
]
