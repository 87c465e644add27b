"""Reference agent implementation."""

from capmesh.agent.agent import DEFAULT_MAX_TOKENS, DEFAULT_MAX_TURNS, Agent
from capmesh.agent.builder import AgentBuilder

__all__ = [
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_MAX_TURNS",
    "Agent",
    "AgentBuilder",
]
