"""Tests for the mesh facade."""

from __future__ import annotations

import asyncio
import threading

import pytest

from capmesh import Mesh, new_context
from capmesh.core.capability import cap
from capmesh.core.errors import (
    AgentNotFoundError,
    CycleDetectedError,
    ProviderExecutionError,
    RegistrationError,
)
from capmesh.mesh import FirstBalancer, new_mesh

pytestmark = pytest.mark.anyio


class TestRegistration:
    def test_register_many(self, make_agent) -> None:
        mesh = Mesh()
        mesh.register(make_agent("a"), make_agent("b"), make_agent("c"))

        assert [a.id for a in mesh.list_agents()] == ["a", "b", "c"]

    def test_empty_mesh_is_truthy(self) -> None:
        mesh = Mesh()
        assert mesh
        assert (mesh or None) is mesh

    def test_stats(self, make_agent) -> None:
        mesh = new_mesh(
            [make_agent("r", provides=["research"]), make_agent("w", needs=["research", "coding"])]
        )
        stats = mesh.stats()
        assert stats["total_agents"] == 2
        assert stats["by_capability"] == {"research": 1}
        assert stats["unmet_needs"] == ["coding"]

    def test_register_is_not_transactional(self, make_agent) -> None:
        """Agents before the failing one stay registered; later ones are skipped."""
        mesh = Mesh()
        with pytest.raises(RegistrationError):
            mesh.register(make_agent("a"), make_agent(""), make_agent("c"))

        assert [a.id for a in mesh.list_agents()] == ["a"]

    def test_get_and_deregister(self, make_agent) -> None:
        agent = make_agent("a")
        mesh = new_mesh([agent])

        assert mesh.get_agent("a") is agent
        mesh.deregister("a")
        with pytest.raises(AgentNotFoundError):
            mesh.get_agent("a")

    def test_find_providers(self, make_agent) -> None:
        mesh = new_mesh(
            [make_agent("r1", provides=["research"]), make_agent("w", provides=["writing"])]
        )
        assert [a.id for a in mesh.find_providers(cap("research"))] == ["r1"]
        assert mesh.find_providers(cap("coding")) == []


class TestPrepareAgent:
    def test_writer_gets_one_research_tool(self, make_agent) -> None:
        researcher = make_agent("researcher", provides=["research"])
        writer = make_agent("writer", provides=["writing"], needs=["research"])
        mesh = new_mesh([researcher, writer])

        tools = mesh.prepare_agent(writer)

        assert [t.name for t in tools] == ["delegate_to_research"]
        assert [t.name for t in writer.tools] == ["delegate_to_research"]
        assert researcher.tools == []

    def test_no_provider_means_no_tool(self, make_agent) -> None:
        writer = make_agent("writer", needs=["research"])
        mesh = new_mesh([writer])

        assert mesh.prepare_agent(writer) == []
        assert writer.prepare_count == 1

    def test_prepare_again_follows_topology(self, make_agent) -> None:
        writer = make_agent("writer", needs=["research", "coding"])
        mesh = new_mesh([writer])
        assert mesh.prepare_agent(writer) == []

        mesh.register(make_agent("coder", provides=["coding"]))
        assert [t.name for t in mesh.prepare_agent(writer)] == ["delegate_to_coding"]

        mesh.register(make_agent("researcher", provides=["research"]))
        mesh.deregister("coder")
        assert [t.name for t in mesh.prepare_agent(writer)] == ["delegate_to_research"]
        assert [t.name for t in writer.tools] == ["delegate_to_research"]

    def test_agents_without_tool_host_are_untouched(self, make_agent) -> None:
        class Plain:
            id = "plain"
            name = "plain"
            description = ""
            provides = ()
            needs = [cap("research")]

            async def run(self, ctx, input):
                raise AssertionError("not called")

        mesh = new_mesh([make_agent("r", provides=["research"])])
        tools = mesh.prepare_agent(Plain())
        assert [t.name for t in tools] == ["delegate_to_research"]

    def test_resolve_tools_does_not_attach(self, make_agent) -> None:
        writer = make_agent("writer", needs=["research"])
        mesh = new_mesh([writer, make_agent("researcher", provides=["research"])])

        tools = mesh.resolve_tools(writer)

        assert [t.name for t in tools] == ["delegate_to_research"]
        assert writer.tools == []
        assert writer.prepare_count == 0


class TestRun:
    async def test_run_agent_assigns_trace_id(self, make_agent) -> None:
        agent = make_agent("a")
        mesh = new_mesh([agent])

        result = await mesh.run_agent(None, "a", "hello")

        assert result.output == "a done"
        assert result.trace_id
        assert result.call_chain == ("a",)

    async def test_run_agent_keeps_caller_trace(self, make_agent) -> None:
        mesh = new_mesh([make_agent("a")])
        result = await mesh.run_agent(new_context("trace-xyz"), "a", "hi")
        assert result.trace_id == "trace-xyz"

    async def test_run_agent_unknown(self) -> None:
        with pytest.raises(AgentNotFoundError):
            await Mesh().run_agent(None, "ghost", "hi")

    async def test_run_uses_first_registered(self, make_agent) -> None:
        first = make_agent("first")
        second = make_agent("second")
        mesh = new_mesh([first, second])

        result = await mesh.run(None, "task")

        assert result.output == "first done"
        assert len(first.calls) == 1
        assert second.calls == []

    async def test_run_on_empty_mesh(self) -> None:
        with pytest.raises(AgentNotFoundError):
            await Mesh().run(None, "task")

    @pytest.mark.parametrize("entry", ["run_agent", "run"])
    def test_agents_can_change_topology_while_running(self, make_agent, entry: str) -> None:
        """Register and deregister from inside a run; a held mesh lock would hang here."""

        async def reshape(agent, ctx, input):
            mesh.register(make_agent("helper", provides=["research"]))
            assert [t.name for t in mesh.prepare_agent(agent)] == ["delegate_to_research"]
            mesh.deregister("helper")
            return "reshaped"

        mesh = new_mesh([make_agent("root", needs=["research"], behavior=reshape)])

        async def go():
            if entry == "run_agent":
                return await mesh.run_agent(None, "root", "go")
            return await mesh.run(None, "go")

        outcome = []
        worker = threading.Thread(target=lambda: outcome.append(asyncio.run(go())), daemon=True)
        worker.start()
        worker.join(timeout=5)

        assert not worker.is_alive()
        assert outcome[0].output == "reshaped"
        assert [a.id for a in mesh.list_agents()] == ["root"]


class TestDelegation:
    async def test_writer_delegates_to_researcher(self, make_agent) -> None:
        async def write(agent, ctx, input):
            findings = await agent.tool("delegate_to_research").execute(
                ctx, {"task": "Find info", "context": input}
            )
            return f"Article based on: {findings}"

        researcher = make_agent("researcher", provides=["research"], output="AI is advancing")
        writer = make_agent("writer", provides=["writing"], needs=["research"], behavior=write)
        mesh = new_mesh([researcher, writer])

        result = await mesh.run_agent(new_context("t"), "writer", "AI trends")

        assert result.output == "Article based on: AI is advancing"
        ctx, received = researcher.calls[0]
        assert received == "Context: AI trends\n\nTask: Find info"
        assert ctx.call_chain == ("writer", "researcher")
        assert ctx.hop_count == 1
        assert ctx.trace_id == "t"

    async def test_delegation_back_to_root_is_a_cycle(self, make_agent) -> None:
        """writer -> researcher -> writer is rejected before the writer runs twice."""

        async def write(agent, ctx, input):
            return await agent.tool("delegate_to_research").execute(ctx, {"task": input})

        async def research(agent, ctx, input):
            mesh.prepare_agent(agent)
            return await agent.tool("delegate_to_writing").execute(ctx, {"task": input})

        writer = make_agent("writer", provides=["writing"], needs=["research"], behavior=write)
        researcher = make_agent(
            "researcher", provides=["research"], needs=["writing"], behavior=research
        )
        mesh = new_mesh([writer, researcher], balancer=FirstBalancer())

        with pytest.raises(ProviderExecutionError) as exc_info:
            await mesh.run_agent(None, "writer", "go")

        # The researcher's failure is wrapped by the writer's delegation tool
        assert isinstance(exc_info.value.__cause__, CycleDetectedError)
        assert len(writer.calls) == 1

    async def test_concurrent_siblings_keep_independent_chains(self, make_agent) -> None:
        async def lead(agent, ctx, input):
            outputs = await asyncio.gather(
                agent.tool("delegate_to_research").execute(ctx, {"task": "r"}),
                agent.tool("delegate_to_writing").execute(ctx, {"task": "w"}),
            )
            return " | ".join(outputs)

        researcher = make_agent("researcher", provides=["research"])
        writer = make_agent("writer", provides=["writing"])
        planner = make_agent("planner", needs=["research", "writing"], behavior=lead)
        mesh = new_mesh([planner, researcher, writer])

        result = await mesh.run(None, "plan")

        assert result.output == "researcher done | writer done"
        assert researcher.calls[0][0].call_chain == ("planner", "researcher")
        assert writer.calls[0][0].call_chain == ("planner", "writer")
        assert researcher.calls[0][0].hop_count == writer.calls[0][0].hop_count == 1
        assert planner.calls[0][0].call_chain == ("planner",)
