"""Local Registry - In-memory store of known agents and their capabilities."""

from __future__ import annotations

from typing import Any

from capmesh.core.capability import Capability
from capmesh.core.errors import AgentNotFoundError, RegistrationError
from capmesh.core.types import Agent
from capmesh.registry.lock import ReadWriteLock


class LocalRegistry:
    """
    Manages the agents known to a single process.

    Features:
    - Reader/writer locking (lookups run together, writes are exclusive)
    - Re-registration under an existing id is an update, not an error
    - Stable result order: agents are kept in first-registration order
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._agents: dict[str, Agent] = {}

    def register(self, agent: Agent) -> None:
        """Register an agent, replacing any previous agent with the same id."""
        agent_id = getattr(agent, "id", None)
        if not isinstance(agent_id, str) or not agent_id:
            raise RegistrationError(f"agent has no usable id: {agent!r}")

        with self._lock.write_locked():
            self._agents[agent_id] = agent

    def deregister(self, agent_id: str) -> None:
        """Remove an agent. Unknown ids are ignored."""
        with self._lock.write_locked():
            self._agents.pop(agent_id, None)

    def get(self, agent_id: str) -> Agent:
        """Get agent by ID."""
        with self._lock.read_locked():
            agent = self._agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)
        return agent

    def find_by_capability(self, capability: Capability) -> list[Agent]:
        """Get all agents whose declared provides contain ``capability`` exactly."""
        with self._lock.read_locked():
            agents = list(self._agents.values())
        return [agent for agent in agents if capability in agent.provides]

    def list(self) -> list[Agent]:
        """Get all registered agents."""
        with self._lock.read_locked():
            return list(self._agents.values())

    def get_stats(self) -> dict[str, Any]:
        """Get registry statistics."""
        by_capability: dict[str, int] = {}
        unmet: set[str] = set()

        agents = self.list()
        provided = {c for agent in agents for c in agent.provides}
        for agent in agents:
            for c in set(agent.provides):
                by_capability[c] = by_capability.get(c, 0) + 1
            unmet.update(c for c in agent.needs if c not in provided)

        return {
            "total_agents": len(agents),
            "by_capability": by_capability,
            "unmet_needs": sorted(unmet),
        }

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        with self._lock.read_locked():
            return agent_id in self._agents
