"""Model provider contract used by the reference agent loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol

from capmesh.core.context import ExecutionContext
from capmesh.core.types import Message, ToolCall


class StopReason(StrEnum):
    """Why the model stopped generating."""

    END_TURN = "end_turn"
    TOOL_USE = "tool_use"
    MAX_TOKENS = "max_tokens"


@dataclass
class ToolDefinition:
    """A tool advertised to the model."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)


@dataclass
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class ChatRequest:
    """One turn of the agent loop sent to the model."""

    messages: list[Message]
    system: str = ""
    tools: list[ToolDefinition] = field(default_factory=list)
    model: str = ""
    max_tokens: int = 4096
    temperature: float = 0.0


@dataclass
class ChatResponse:
    content: str = ""
    stop_reason: StopReason = StopReason.END_TURN
    tool_calls: list[ToolCall] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)


class Provider(Protocol):
    """A model backend an agent reasons with."""

    @property
    def name(self) -> str: ...

    async def chat(self, ctx: ExecutionContext, request: ChatRequest) -> ChatResponse: ...
