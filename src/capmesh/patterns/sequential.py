"""Sequential pipeline: each agent's output feeds the next agent."""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any

from capmesh.core.capability import Capability, dedupe
from capmesh.core.context import ExecutionContext
from capmesh.core.types import Agent, Result


class Sequential:
    """Runs agents one after another, passing outputs forward."""

    def __init__(self, id: str, agents: Sequence[Agent], description: str = "") -> None:
        if not agents:
            raise ValueError("sequential pattern needs at least one agent")
        self._id = id
        self._agents = tuple(agents)
        self._description = description or f"Pipeline of {len(agents)} agents"

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
        steps: list[dict[str, Any]] = []
        tokens_in = 0
        tokens_out = 0

        current = input
        last_chain = ctx.call_chain
        for agent in self._agents:
            result = await agent.run(ctx, current)
            tokens_in += result.tokens_in
            tokens_out += result.tokens_out
            steps.append(
                {
                    "agent_id": agent.id,
                    "call_chain": list(result.call_chain),
                    "tokens_in": result.tokens_in,
                    "tokens_out": result.tokens_out,
                }
            )
            current = result.output
            last_chain = result.call_chain

        return Result(
            output=current,
            metadata={"pattern": "sequential", "steps": steps},
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            duration=time.monotonic() - start,
            trace_id=ctx.trace_id,
            call_chain=last_chain,
        )
