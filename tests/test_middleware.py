"""Tests for the run-logging agent wrapper."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from capmesh.core.context import new_context
from capmesh.core.types import ToolHost
from capmesh.mesh import new_mesh
from capmesh.middleware import LoggingAgent, with_logging

pytestmark = pytest.mark.anyio


class TestLoggingAgent:
    async def test_logs_start_and_completion(self, make_agent) -> None:
        agent = with_logging(make_agent("researcher", provides=["research"]))

        with capture_logs() as logs:
            result = await agent.run(new_context("trace-1").with_hop(), "find it")

        assert result.output == "researcher done"
        assert [entry["event"] for entry in logs] == ["agent_run_started", "agent_run_completed"]
        started, completed = logs
        assert started["agent_id"] == "researcher"
        assert started["trace_id"] == "trace-1"
        assert started["hop_count"] == 1
        assert started["input_length"] == len("find it")
        assert completed["tokens_out"] == len("researcher done")
        assert completed["chain_depth"] == 1

    async def test_logs_and_reraises_failures(self, make_agent) -> None:
        boom = RuntimeError("backend down")
        agent = with_logging(make_agent("researcher", error=boom))

        with capture_logs() as logs:
            with pytest.raises(RuntimeError) as exc_info:
                await agent.run(new_context(), "x")

        assert exc_info.value is boom
        failed = logs[-1]
        assert failed["event"] == "agent_run_failed"
        assert failed["log_level"] == "error"
        assert failed["error_type"] == "RuntimeError"
        assert failed["error"] == "backend down"

    def test_proxies_agent_identity(self, make_agent) -> None:
        inner = make_agent("writer", provides=["writing"], needs=["research"])
        agent = LoggingAgent(inner)

        assert agent.wrapped is inner
        assert agent.id == "writer"
        assert agent.provides == inner.provides
        assert agent.needs == inner.needs
        assert isinstance(agent, ToolHost)

    def test_forwards_delegation_tools(self, make_agent) -> None:
        inner = make_agent("writer", needs=["research"])
        wrapped = with_logging(inner)
        mesh = new_mesh([wrapped, make_agent("researcher", provides=["research"])])

        mesh.prepare_agent(wrapped)

        assert [t.name for t in inner.tools] == ["delegate_to_research"]
