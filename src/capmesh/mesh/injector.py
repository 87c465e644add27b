"""
Delegation Tools - Turn "agent B provides what agent A needs" into a tool.

For every capability an agent needs, the injector looks up the current
providers and wraps them in an AgentTool. Executing the tool picks a
provider, checks the call chain, extends the context and runs the provider.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from capmesh.core.capability import Capability, dedupe
from capmesh.core.context import ExecutionContext
from capmesh.core.errors import (
    InvalidToolInputError,
    NoProviderAvailableError,
    ProviderExecutionError,
)
from capmesh.core.types import Agent
from capmesh.mesh.balancer import Balancer
from capmesh.mesh.cycle import CycleDetector
from capmesh.registry.base import Registry

TOOL_NAME_PREFIX = "delegate_to_"


class DelegationRequest(BaseModel):
    """Input accepted by every delegation tool."""

    task: str = Field(
        description="The specific task or question to delegate to the specialized agent",
    )
    context: str = Field(
        default="",
        description="Additional context that might help the agent understand the task better",
    )

    def combined_input(self) -> str:
        if self.context:
            return f"Context: {self.context}\n\nTask: {self.task}"
        return self.task


class AgentTool:
    """Delegation tool bound to one capability and its resolved providers."""

    __slots__ = ("_capability", "_providers", "_balancer", "_cycle_detector")

    def __init__(
        self,
        capability: Capability,
        providers: Sequence[Agent],
        balancer: Balancer,
        cycle_detector: CycleDetector,
    ) -> None:
        self._capability = capability
        self._providers = tuple(providers)
        self._balancer = balancer
        self._cycle_detector = cycle_detector

    @property
    def capability(self) -> Capability:
        return self._capability

    @property
    def providers(self) -> tuple[Agent, ...]:
        return self._providers

    @property
    def name(self) -> str:
        return f"{TOOL_NAME_PREFIX}{self._capability}"

    @property
    def description(self) -> str:
        return (
            f"Delegate a task to a specialized agent that provides '{self._capability}' "
            f"capability. Use this when you need expert help with "
            f"{self._capability}-related tasks. The agent will process your request "
            f"and return the result."
        )

    def schema(self) -> dict[str, Any]:
        return DelegationRequest.model_json_schema()

    async def execute(self, ctx: ExecutionContext, params: str | Mapping[str, Any]) -> str:
        """
        Run the delegation.

        Returns:
            The provider's output text (usage metadata stays behind the tool boundary)

        Raises:
            InvalidToolInputError: Parameters are not a valid DelegationRequest
            NoProviderAvailableError: The balancer returned no provider
            CycleDetectedError / HopBudgetExceededError: Entering the provider is unsafe
            ProviderExecutionError: The provider's run failed
        """
        request = _parse_request(params)

        provider = self._balancer.select(self._providers)
        if provider is None:
            raise NoProviderAvailableError(self._capability)

        # Check for cycles before executing
        self._cycle_detector.check(ctx, provider.id)
        child_ctx = self._cycle_detector.prepare_context(ctx, provider.id)

        try:
            result = await provider.run(child_ctx, request.combined_input())
        except Exception as exc:
            raise ProviderExecutionError(provider.id, provider.name, exc) from exc

        return result.output

    def __repr__(self) -> str:
        ids = [p.id for p in self._providers]
        return f"AgentTool(name={self.name!r}, providers={ids!r})"


def _parse_request(params: str | Mapping[str, Any]) -> DelegationRequest:
    try:
        if isinstance(params, (str, bytes)):
            return DelegationRequest.model_validate_json(params)
        return DelegationRequest.model_validate(dict(params))
    except (ValidationError, TypeError, ValueError) as exc:
        raise InvalidToolInputError(f"invalid input: {exc}") from exc


class Injector:
    """Creates delegation tools for agents from the registry's current contents."""

    def __init__(
        self,
        registry: Registry,
        balancer: Balancer,
        cycle_detector: CycleDetector,
    ) -> None:
        self.registry = registry
        self.balancer = balancer
        self.cycle_detector = cycle_detector

    def inject_tools(self, agent: Agent) -> list[AgentTool]:
        """
        Build one tool per satisfiable need.

        Needs are visited in declared order and duplicates collapse to one
        tool. Needs without providers produce no tool and no error.
        """
        tools: list[AgentTool] = []
        for need in dedupe(agent.needs):
            providers = self.registry.find_by_capability(need)
            if not providers:
                continue
            tools.append(AgentTool(need, providers, self.balancer, self.cycle_detector))
        return tools


def describe_tools(tools: Sequence[AgentTool]) -> list[dict[str, Any]]:
    """Tool definitions as advertised to a model."""
    return [
        {"name": t.name, "description": t.description, "input_schema": t.schema()}
        for t in tools
    ]
