"""Core contracts: agents, tools, and the values exchanged between them."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

from capmesh.core.capability import Capability
from capmesh.core.context import ExecutionContext


@dataclass
class Result:
    """Output of an agent execution."""

    output: str
    metadata: dict[str, Any] = field(default_factory=dict)
    tokens_in: int = 0
    tokens_out: int = 0
    duration: float = 0.0  # seconds
    trace_id: str = ""
    call_chain: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "output": self.output,
            "metadata": self.metadata,
            "tokens_in": self.tokens_in,
            "tokens_out": self.tokens_out,
            "duration": round(self.duration, 4),
            "trace_id": self.trace_id,
            "call_chain": list(self.call_chain),
        }


@runtime_checkable
class Agent(Protocol):
    """An executable entity the mesh can register and delegate to."""

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def provides(self) -> Sequence[Capability]: ...

    @property
    def needs(self) -> Sequence[Capability]: ...

    async def run(self, ctx: ExecutionContext, input: str) -> Result: ...


@runtime_checkable
class Tool(Protocol):
    """A callable unit an agent can invoke during its reasoning loop."""

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    def schema(self) -> dict[str, Any]: ...

    async def execute(
        self, ctx: ExecutionContext, params: str | Mapping[str, Any]
    ) -> str: ...


@runtime_checkable
class ToolHost(Protocol):
    """An agent that accepts delegation tools injected by the mesh."""

    def set_delegation_tools(self, tools: Sequence[Tool]) -> None: ...


class Role(StrEnum):
    """Conversation message roles."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


@dataclass
class ToolCall:
    """A request from the model to execute a tool."""

    id: str
    name: str
    params: str | dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolResult:
    call_id: str
    content: str
    is_error: bool = False


@dataclass
class Message:
    """One message in an agent conversation."""

    role: Role
    content: str = ""
    tool_calls: list[ToolCall] = field(default_factory=list)
    tool_result: ToolResult | None = None
