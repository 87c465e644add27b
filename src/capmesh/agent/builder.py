"""Fluent builder for reference agents."""

from __future__ import annotations

from capmesh.agent.agent import DEFAULT_MAX_TOKENS, DEFAULT_MAX_TURNS, Agent
from capmesh.core.capability import Capability
from capmesh.core.types import Tool
from capmesh.provider.base import Provider


class AgentBuilder:
    """
    Builds an Agent step by step.

    Usage:
        writer = (
            AgentBuilder("writer")
            .model(provider)
            .needs(RESEARCH)
            .provides(WRITING)
            .build()
        )
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self._id: str | None = None
        self._description = ""
        self._system = ""
        self._provider: Provider | None = None
        self._tools: list[Tool] = []
        self._provides: list[Capability] = []
        self._needs: list[Capability] = []
        self._max_tokens = DEFAULT_MAX_TOKENS
        self._temperature = 0.0
        self._max_turns = DEFAULT_MAX_TURNS

    def id(self, agent_id: str) -> AgentBuilder:
        self._id = agent_id
        return self

    def description(self, text: str) -> AgentBuilder:
        self._description = text
        return self

    def system(self, prompt: str) -> AgentBuilder:
        self._system = prompt
        return self

    def model(self, provider: Provider) -> AgentBuilder:
        self._provider = provider
        return self

    def tools(self, *tools: Tool) -> AgentBuilder:
        self._tools.extend(tools)
        return self

    def provides(self, *caps: Capability) -> AgentBuilder:
        self._provides.extend(caps)
        return self

    def needs(self, *caps: Capability) -> AgentBuilder:
        self._needs.extend(caps)
        return self

    def max_tokens(self, n: int) -> AgentBuilder:
        self._max_tokens = n
        return self

    def temperature(self, t: float) -> AgentBuilder:
        if not 0.0 <= t <= 1.0:
            raise ValueError(f"temperature must be in [0.0, 1.0], got {t}")
        self._temperature = t
        return self

    def max_turns(self, n: int) -> AgentBuilder:
        if n <= 0:
            raise ValueError(f"max_turns must be > 0, got {n}")
        self._max_turns = n
        return self

    def build(self) -> Agent:
        return Agent(
            self._name,
            id=self._id,
            description=self._description,
            system=self._system,
            provider=self._provider,
            tools=self._tools,
            provides=self._provides,
            needs=self._needs,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
            max_turns=self._max_turns,
        )
