"""Agent - Reference implementation of the agent contract with a tool loop."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from typing import Any

from capmesh.core.capability import Capability
from capmesh.core.context import ExecutionContext
from capmesh.core.errors import (
    AgentConfigurationError,
    MaxTurnsExceededError,
    ToolNotFoundError,
)
from capmesh.core.types import Message, Result, Role, Tool, ToolCall, ToolResult
from capmesh.provider.base import ChatRequest, Provider, StopReason, ToolDefinition

DEFAULT_MAX_TOKENS = 4096
DEFAULT_MAX_TURNS = 10


class Agent:
    """
    Agent that reasons with a model provider and calls tools.

    Tools come from two places: the agent's own tools, fixed at
    construction, and delegation tools attached by the mesh on every
    prepare. Preparing again replaces only the delegation tools.
    """

    def __init__(
        self,
        name: str,
        *,
        id: str | None = None,
        description: str = "",
        system: str = "",
        provider: Provider | None = None,
        tools: Sequence[Tool] = (),
        provides: Sequence[Capability] = (),
        needs: Sequence[Capability] = (),
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = 0.0,
        max_turns: int = DEFAULT_MAX_TURNS,
    ) -> None:
        self._id = id or name
        self._name = name
        self._description = description
        self.system = system
        self.provider = provider
        self._own_tools = tuple(tools)
        self._delegation_tools: tuple[Tool, ...] = ()
        self._provides = tuple(provides)
        self._needs = tuple(needs)
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_turns = max_turns
        self._tools_lock = threading.Lock()

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def provides(self) -> tuple[Capability, ...]:
        return self._provides

    @property
    def needs(self) -> tuple[Capability, ...]:
        return self._needs

    @property
    def tools(self) -> tuple[Tool, ...]:
        """Own tools followed by the current delegation tools."""
        with self._tools_lock:
            return self._own_tools + self._delegation_tools

    def set_delegation_tools(self, tools: Sequence[Tool]) -> None:
        """Replace the delegation tools attached by the mesh."""
        with self._tools_lock:
            self._delegation_tools = tuple(tools)

    async def run(self, ctx: ExecutionContext, input: str) -> Result:
        """
        Run the tool loop until the model answers without calling tools.

        Tool failures are reported back to the model as error results so it
        can retry, pick another tool or give up.
        """
        start = time.monotonic()
        if self.provider is None:
            raise AgentConfigurationError(f"agent {self._name} has no provider configured")

        ctx = ctx.enter(self._id)
        tools = self.tools
        tool_defs = [
            ToolDefinition(name=t.name, description=t.description, input_schema=t.schema())
            for t in tools
        ]
        messages = [Message(role=Role.USER, content=input)]

        tokens_in = 0
        tokens_out = 0
        tool_errors: list[dict[str, Any]] = []

        for _ in range(self.max_turns):
            request = ChatRequest(
                messages=list(messages),
                system=self.system,
                tools=tool_defs,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            response = await self.provider.chat(ctx, request)
            tokens_in += response.usage.input_tokens
            tokens_out += response.usage.output_tokens

            if response.stop_reason != StopReason.TOOL_USE or not response.tool_calls:
                return Result(
                    output=response.content,
                    metadata={"tool_errors": tool_errors} if tool_errors else {},
                    tokens_in=tokens_in,
                    tokens_out=tokens_out,
                    duration=time.monotonic() - start,
                    trace_id=ctx.trace_id,
                    call_chain=ctx.call_chain,
                )

            messages.append(
                Message(role=Role.ASSISTANT, content=response.content, tool_calls=response.tool_calls)
            )
            for call in response.tool_calls:
                result = await self._execute_tool(ctx, tools, call)
                if result.is_error:
                    tool_errors.append({"tool": call.name, "error": result.content})
                messages.append(Message(role=Role.TOOL, tool_result=result))

        raise MaxTurnsExceededError(
            f"agent {self._name} exceeded {self.max_turns} turns without a final answer"
        )

    async def _execute_tool(
        self, ctx: ExecutionContext, tools: Sequence[Tool], call: ToolCall
    ) -> ToolResult:
        tool = next((t for t in tools if t.name == call.name), None)
        try:
            if tool is None:
                raise ToolNotFoundError(call.name)
            content = await tool.execute(ctx, call.params)
        except Exception as exc:
            return ToolResult(call_id=call.id, content=str(exc), is_error=True)
        return ToolResult(call_id=call.id, content=content)

    def __repr__(self) -> str:
        return f"Agent(id={self._id!r}, provides={list(self._provides)!r}, needs={list(self._needs)!r})"
