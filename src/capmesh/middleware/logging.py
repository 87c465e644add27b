"""Logging wrapper that adds run logs to any agent."""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any

from capmesh.core.capability import Capability
from capmesh.core.context import ExecutionContext
from capmesh.core.types import Agent, Result, Tool, ToolHost
from capmesh.observability.logging import get_logger


class LoggingAgent:
    """
    Wraps an agent and logs every run.

    Events: ``agent_run_started``, ``agent_run_completed`` and
    ``agent_run_failed``, each bound to the agent id and trace id. Errors
    are logged and re-raised unchanged.
    """

    def __init__(self, agent: Agent, logger: Any | None = None) -> None:
        self._agent = agent
        self._log = logger or get_logger("capmesh.agent")

    @property
    def wrapped(self) -> Agent:
        return self._agent

    @property
    def id(self) -> str:
        return self._agent.id

    @property
    def name(self) -> str:
        return self._agent.name

    @property
    def description(self) -> str:
        return self._agent.description

    @property
    def provides(self) -> Sequence[Capability]:
        return self._agent.provides

    @property
    def needs(self) -> Sequence[Capability]:
        return self._agent.needs

    def set_delegation_tools(self, tools: Sequence[Tool]) -> None:
        if isinstance(self._agent, ToolHost):
            self._agent.set_delegation_tools(tools)

    async def run(self, ctx: ExecutionContext, input: str) -> Result:
        log = self._log.bind(
            agent_id=self._agent.id,
            trace_id=ctx.trace_id,
            hop_count=ctx.hop_count,
        )
        log.info("agent_run_started", input_length=len(input), call_chain=list(ctx.call_chain))

        start = time.monotonic()
        try:
            result = await self._agent.run(ctx, input)
        except Exception as exc:
            log.error(
                "agent_run_failed",
                error=str(exc),
                error_type=type(exc).__name__,
                duration=round(time.monotonic() - start, 4),
            )
            raise

        log.info(
            "agent_run_completed",
            duration=round(time.monotonic() - start, 4),
            tokens_in=result.tokens_in,
            tokens_out=result.tokens_out,
            chain_depth=len(result.call_chain),
        )
        return result


def with_logging(agent: Agent, logger: Any | None = None) -> LoggingAgent:
    """Wrap ``agent`` with run logging."""
    return LoggingAgent(agent, logger)
