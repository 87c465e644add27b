"""Build a mesh from configuration."""

from __future__ import annotations

from capmesh.agent.agent import Agent
from capmesh.config.models import AgentSettings, Config
from capmesh.core.capability import cap
from capmesh.mesh.balancer import new_balancer
from capmesh.mesh.mesh import Mesh, new_mesh
from capmesh.middleware.logging import LoggingAgent, with_logging
from capmesh.provider.mock import MockProvider


def build_agent(settings: AgentSettings) -> Agent:
    """Create an offline agent that answers with its configured response."""
    response = settings.response or f"{settings.name} received the task."
    return Agent(
        settings.name,
        id=settings.id,
        description=settings.description,
        system=settings.system,
        provider=MockProvider.with_response(response),
        provides=[cap(c) for c in settings.provides],
        needs=[cap(c) for c in settings.needs],
    )


def build_mesh(config: Config) -> Mesh:
    """Create a mesh with the configured balancer and hop budget, and register agents."""
    balancer = new_balancer(config.mesh.balancer, seed=config.mesh.seed)
    agents: list[Agent | LoggingAgent] = [build_agent(a) for a in config.agents]
    if config.logging.log_runs:
        agents = [with_logging(a) for a in agents]
    return new_mesh(
        agents,
        balancer=balancer,
        max_hops=config.mesh.max_hops,
    )
