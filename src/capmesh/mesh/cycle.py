"""Cycle detection and hop budget for delegation chains."""

from __future__ import annotations

from capmesh.core.context import ExecutionContext
from capmesh.core.errors import CycleDetectedError, HopBudgetExceededError

DEFAULT_MAX_HOPS = 10


class CycleDetector:
    """Prevents re-entrant and unbounded delegation between agents."""

    def __init__(self, max_hops: int = DEFAULT_MAX_HOPS) -> None:
        """Initialize the detector.

        Args:
            max_hops: Maximum delegation depth; non-positive values fall back
                to DEFAULT_MAX_HOPS
        """
        if max_hops <= 0:
            max_hops = DEFAULT_MAX_HOPS
        self._max_hops = max_hops

    @property
    def max_hops(self) -> int:
        return self._max_hops

    def check(self, ctx: ExecutionContext, agent_id: str) -> None:
        """Verify that entering ``agent_id`` from ``ctx`` is safe.

        Raises:
            CycleDetectedError: The agent is already anywhere in the call chain
            HopBudgetExceededError: The chain already used ``max_hops`` hops
        """
        if ctx.in_call_chain(agent_id):
            raise CycleDetectedError(agent_id, ctx.call_chain)

        if ctx.hop_count >= self._max_hops:
            raise HopBudgetExceededError(agent_id, ctx.hop_count, self._max_hops)

    def prepare_context(self, ctx: ExecutionContext, agent_id: str) -> ExecutionContext:
        """Return the context for running ``agent_id``: chain extended, one more hop."""
        return ctx.with_call(agent_id).with_hop()
