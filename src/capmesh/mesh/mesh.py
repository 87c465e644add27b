"""Mesh - Central facade for capability-based delegation between agents."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from capmesh.core.capability import Capability
from capmesh.core.context import ExecutionContext
from capmesh.core.errors import AgentNotFoundError
from capmesh.core.types import Agent, Result, ToolHost
from capmesh.mesh.balancer import Balancer, RoundRobinBalancer
from capmesh.mesh.cycle import DEFAULT_MAX_HOPS, CycleDetector
from capmesh.mesh.injector import AgentTool, Injector
from capmesh.registry.base import Registry
from capmesh.registry.local import LocalRegistry
from capmesh.registry.lock import ReadWriteLock


class Mesh:
    """
    Main entry point for a network of agents.

    Workflow:
    1. Register agents (each declares provides/needs)
    2. Prepare an agent: resolve its needs against the registry and attach
       one delegation tool per satisfiable need
    3. Run the agent; its delegation tools re-enter the mesh through the
       balancer and the cycle detector

    Resolution happens on every prepare, so agents registered or removed
    between runs are honored without rebuilding anything.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        balancer: Balancer | None = None,
        max_hops: int = DEFAULT_MAX_HOPS,
    ) -> None:
        self._lock = ReadWriteLock()
        self._registry: Registry = registry if registry is not None else LocalRegistry()
        self._balancer: Balancer = balancer if balancer is not None else RoundRobinBalancer()
        self._cycle_detector = CycleDetector(max_hops)
        self._injector = Injector(self._registry, self._balancer, self._cycle_detector)

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def balancer(self) -> Balancer:
        return self._balancer

    @property
    def cycle_detector(self) -> CycleDetector:
        return self._cycle_detector

    def register(self, *agents: Agent) -> None:
        """
        Register agents in order.

        The first failure aborts the call; agents registered before it stay
        registered.
        """
        with self._lock.write_locked():
            for agent in agents:
                self._registry.register(agent)

    def deregister(self, agent_id: str) -> None:
        with self._lock.write_locked():
            self._registry.deregister(agent_id)

    def get_agent(self, agent_id: str) -> Agent:
        with self._lock.read_locked():
            return self._registry.get(agent_id)

    def list_agents(self) -> list[Agent]:
        with self._lock.read_locked():
            return self._registry.list()

    def find_providers(self, capability: Capability) -> list[Agent]:
        with self._lock.read_locked():
            return self._registry.find_by_capability(capability)

    def stats(self) -> dict[str, Any]:
        """Registry statistics: agent count, providers per capability, unmet needs."""
        with self._lock.read_locked():
            return self._registry.get_stats()

    def resolve_tools(self, agent: Agent) -> list[AgentTool]:
        """Resolve the delegation tools ``agent`` would receive, without attaching them."""
        with self._lock.read_locked():
            return self._injector.inject_tools(agent)

    def prepare_agent(self, agent: Agent) -> list[AgentTool]:
        """
        Resolve the agent's needs and attach fresh delegation tools.

        Agents that do not accept injected tools are left untouched; the
        resolved tools are returned either way.
        """
        tools = self.resolve_tools(agent)
        if isinstance(agent, ToolHost):
            agent.set_delegation_tools(tools)
        return tools

    async def run_agent(
        self, ctx: ExecutionContext | None, agent_id: str, input: str
    ) -> Result:
        """Look up, prepare and run one agent."""
        ctx = (ctx or ExecutionContext()).ensure_trace_id()

        agent = self.get_agent(agent_id)
        self.prepare_agent(agent)
        return await agent.run(ctx, input)

    async def run(self, ctx: ExecutionContext | None, task: str) -> Result:
        """
        Run a task on the first registered agent.

        No task-to-capability matching is performed.
        """
        ctx = (ctx or ExecutionContext()).ensure_trace_id()

        agents = self.list_agents()
        if not agents:
            raise AgentNotFoundError("<any>")

        agent = agents[0]
        self.prepare_agent(agent)
        return await agent.run(ctx, task)


def new_mesh(
    agents: Sequence[Agent] = (),
    balancer: Balancer | None = None,
    max_hops: int = DEFAULT_MAX_HOPS,
) -> Mesh:
    """Create a mesh and register ``agents``."""
    mesh = Mesh(balancer=balancer, max_hops=max_hops)
    mesh.register(*agents)
    return mesh
