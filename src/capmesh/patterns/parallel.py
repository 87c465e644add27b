"""Parallel fan-out: every agent works on the same input concurrently."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Sequence

from capmesh.core.capability import Capability, dedupe
from capmesh.core.context import ExecutionContext
from capmesh.core.types import Agent, Result

Aggregator = Callable[[Sequence[tuple[str, Result]]], str]


def join_outputs(results: Sequence[tuple[str, Result]]) -> str:
    """Default aggregation: one block per agent, headed by its id."""
    return "\n\n".join(f"[{agent_id}]\n{result.output}" for agent_id, result in results)


class Parallel:
    """
    Runs agents concurrently and aggregates their outputs.

    Every branch starts from the caller's context. Contexts are immutable,
    so delegations inside one branch never show up in another branch's
    call chain. The first branch failure cancels the other branches and
    propagates unchanged.
    """

    def __init__(
        self,
        id: str,
        agents: Sequence[Agent],
        aggregator: Aggregator | None = None,
        description: str = "",
    ) -> None:
        if not agents:
            raise ValueError("parallel pattern needs at least one agent")
        self._id = id
        self._agents = tuple(agents)
        self._aggregator = aggregator or join_outputs
        self._description = description or f"Fan-out over {len(agents)} agents"

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._id

    @property
    def description(self) -> str:
        return self._description

    @property
    def provides(self) -> list[Capability]:
        return dedupe(c for agent in self._agents for c in agent.provides)

    @property
    def needs(self) -> list[Capability]:
        return []

    @property
    def agents(self) -> tuple[Agent, ...]:
        return self._agents

    async def run(self, ctx: ExecutionContext, input: str) -> Result:
        start = time.monotonic()
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(agent.run(ctx, input)) for agent in self._agents]
        except ExceptionGroup as group:
            raise group.exceptions[0]

        results = [task.result() for task in tasks]
        pairs = [(agent.id, result) for agent, result in zip(self._agents, results)]

        return Result(
            output=self._aggregator(pairs),
            metadata={
                "pattern": "parallel",
                "branches": {
                    agent_id: {
                        "call_chain": list(result.call_chain),
                        "tokens_in": result.tokens_in,
                        "tokens_out": result.tokens_out,
                    }
                    for agent_id, result in pairs
                },
            },
            tokens_in=sum(r.tokens_in for r in results),
            tokens_out=sum(r.tokens_out for r in results),
            duration=time.monotonic() - start,
            trace_id=ctx.trace_id,
            call_chain=ctx.call_chain,
        )
