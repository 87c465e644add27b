"""Registry contract for agent discovery and registration."""

from __future__ import annotations

from typing import Any, Protocol

from capmesh.core.capability import Capability
from capmesh.core.types import Agent


class Registry(Protocol):
    """Answers "who provides capability X" for the mesh."""

    def register(self, agent: Agent) -> None:
        """Add an agent, replacing any agent registered under the same id."""
        ...

    def deregister(self, agent_id: str) -> None: ...

    def get(self, agent_id: str) -> Agent:
        """Return the agent or raise AgentNotFoundError."""
        ...

    def find_by_capability(self, capability: Capability) -> list[Agent]: ...

    def list(self) -> list[Agent]: ...

    def get_stats(self) -> dict[str, Any]:
        """Agent count, providers per capability and needs nobody provides."""
        ...
