"""Error kinds surfaced by the mesh."""

from __future__ import annotations


class MeshError(Exception):
    """Base class for all mesh errors."""


class AgentNotFoundError(MeshError, LookupError):
    """No agent is registered under the requested id."""

    def __init__(self, agent_id: str) -> None:
        super().__init__(f"agent not found: {agent_id}")
        self.agent_id = agent_id


class RegistrationError(MeshError):
    """An agent could not be registered."""


class AgentConfigurationError(MeshError):
    """An agent is missing something it needs to run."""


class ToolNotFoundError(MeshError):
    """An agent was asked to call a tool it does not have."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"tool not found: {tool_name}")
        self.tool_name = tool_name


class MaxTurnsExceededError(MeshError):
    """An agent loop kept requesting tools past its turn limit."""


class DelegationError(MeshError):
    """A delegation attempt failed. Recoverable at the tool level."""


class CycleDetectedError(DelegationError):
    """The candidate agent already appears in the call chain."""

    def __init__(self, agent_id: str, call_chain: tuple[str, ...]) -> None:
        path = " -> ".join((*call_chain, agent_id))
        super().__init__(f"cycle detected: {path}")
        self.agent_id = agent_id
        self.call_chain = call_chain


class HopBudgetExceededError(DelegationError):
    """The delegation chain already used its whole hop budget."""

    def __init__(self, agent_id: str, hop_count: int, max_hops: int) -> None:
        super().__init__(
            f"hop budget exceeded: {hop_count} >= {max_hops} (cannot enter {agent_id})"
        )
        self.agent_id = agent_id
        self.hop_count = hop_count
        self.max_hops = max_hops


class NoProviderAvailableError(DelegationError):
    """The balancer had no provider to choose from."""

    def __init__(self, capability: str) -> None:
        super().__init__(f"no provider available for {capability}")
        self.capability = capability


class ProviderExecutionError(DelegationError):
    """The selected provider's run failed."""

    def __init__(self, agent_id: str, agent_name: str, cause: BaseException) -> None:
        super().__init__(f"agent {agent_name} ({agent_id}) failed: {cause}")
        self.agent_id = agent_id
        self.agent_name = agent_name


class InvalidToolInputError(DelegationError, ValueError):
    """Tool parameters could not be parsed or validated."""
