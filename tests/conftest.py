"""Shared fixtures for capmesh tests."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import pytest

from capmesh.core.capability import Capability, cap
from capmesh.core.context import ExecutionContext
from capmesh.core.types import Result, Tool

Behavior = Callable[["StubAgent", ExecutionContext, str], Awaitable[str]]


class StubAgent:
    """Minimal agent: records calls, answers with a fixed output or a behavior."""

    def __init__(
        self,
        agent_id: str,
        provides: Sequence[str] = (),
        needs: Sequence[str] = (),
        output: str = "",
        behavior: Behavior | None = None,
        error: Exception | None = None,
    ) -> None:
        self._id = agent_id
        self._provides = [cap(c) for c in provides]
        self._needs = [cap(c) for c in needs]
        self.output = output or f"{agent_id} done"
        self.behavior = behavior
        self.error = error
        self.tools: list[Tool] = []
        self.prepare_count = 0
        self.calls: list[tuple[ExecutionContext, str]] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._id

    @property
    def description(self) -> str:
        return f"stub {self._id}"

    @property
    def provides(self) -> list[Capability]:
        return self._provides

    @property
    def needs(self) -> list[Capability]:
        return self._needs

    def set_delegation_tools(self, tools: Sequence[Tool]) -> None:
        self.prepare_count += 1
        self.tools = list(tools)

    def tool(self, name: str) -> Tool:
        return next(t for t in self.tools if t.name == name)

    async def run(self, ctx: ExecutionContext, input: str) -> Result:
        ctx = ctx.enter(self._id)
        self.calls.append((ctx, input))
        if self.error is not None:
            raise self.error
        output = self.output
        if self.behavior is not None:
            output = await self.behavior(self, ctx, input)
        return Result(
            output=output,
            tokens_in=len(input),
            tokens_out=len(output),
            trace_id=ctx.trace_id,
            call_chain=ctx.call_chain,
        )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_agent() -> Callable[..., StubAgent]:
    """Factory for stub agents."""

    def factory(agent_id: str, **kwargs: Any) -> StubAgent:
        return StubAgent(agent_id, **kwargs)

    return factory
