"""FastAPI server for programmatic mesh access."""

from __future__ import annotations

import time
from typing import Any

import click
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from capmesh import __version__
from capmesh.config import build_mesh, load_config
from capmesh.core.capability import cap
from capmesh.core.errors import AgentNotFoundError, DelegationError, MeshError
from capmesh.core.types import Agent
from capmesh.mesh.injector import describe_tools
from capmesh.mesh.mesh import Mesh


class RunAgentRequest(BaseModel):
    input: str


class RunTaskRequest(BaseModel):
    task: str


def _agent_summary(agent: Agent) -> dict[str, Any]:
    return {
        "id": agent.id,
        "name": agent.name,
        "description": agent.description,
        "provides": list(agent.provides),
        "needs": list(agent.needs),
    }


def create_app(mesh: Mesh) -> FastAPI:
    """Build the API around an existing mesh."""
    app = FastAPI(
        title="capmesh API",
        version=__version__,
        description="Capability-based delegation mesh",
    )
    app.state.mesh = mesh
    start_time = time.monotonic()

    @app.exception_handler(AgentNotFoundError)
    async def not_found(request: Request, exc: AgentNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404, content={"detail": str(exc), "kind": type(exc).__name__}
        )

    @app.exception_handler(DelegationError)
    async def delegation_failed(request: Request, exc: DelegationError) -> JSONResponse:
        return JSONResponse(
            status_code=422, content={"detail": str(exc), "kind": type(exc).__name__}
        )

    @app.exception_handler(MeshError)
    async def mesh_failed(request: Request, exc: MeshError) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"detail": str(exc), "kind": type(exc).__name__}
        )

    @app.get("/api/health")
    async def health() -> dict[str, Any]:
        """Health check."""
        uptime = time.monotonic() - start_time
        return {
            "status": "ok",
            "version": __version__,
            "uptime_seconds": round(uptime, 1),
            "agents": len(mesh.list_agents()),
            "registry": mesh.stats(),
        }

    @app.get("/api/agents")
    async def list_agents() -> dict[str, Any]:
        agents = [_agent_summary(a) for a in mesh.list_agents()]
        return {"agents": agents, "count": len(agents)}

    @app.get("/api/agents/{agent_id}")
    async def get_agent(agent_id: str) -> dict[str, Any]:
        return _agent_summary(mesh.get_agent(agent_id))

    @app.get("/api/agents/{agent_id}/tools")
    async def agent_tools(agent_id: str) -> dict[str, Any]:
        """Delegation tools the agent would receive now."""
        tools = mesh.resolve_tools(mesh.get_agent(agent_id))
        return {"agent_id": agent_id, "tools": describe_tools(tools)}

    @app.get("/api/capabilities/{capability}/providers")
    async def find_providers(capability: str) -> dict[str, Any]:
        found = mesh.find_providers(cap(capability))
        return {"capability": capability, "providers": [a.id for a in found]}

    @app.post("/api/agents/{agent_id}/run")
    async def run_agent(agent_id: str, body: RunAgentRequest) -> dict[str, Any]:
        result = await mesh.run_agent(None, agent_id, body.input)
        return result.to_dict()

    @app.post("/api/run")
    async def run_task(body: RunTaskRequest) -> dict[str, Any]:
        result = await mesh.run(None, body.task)
        return result.to_dict()

    return app


app = create_app(build_mesh(load_config()))


@click.command()
@click.option("--port", default=3848, help="Port to listen on")
@click.option("--host", default="127.0.0.1", help="Host to bind to")
def main(port: int, host: str) -> None:
    """Start the capmesh API server."""
    import uvicorn

    from capmesh.observability import setup_logging

    config = load_config()
    setup_logging(config.logging.level, config.logging.format)
    uvicorn.run(create_app(build_mesh(config)), host=host, port=port)
