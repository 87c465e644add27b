"""Execution context - the call chain carried through every delegation."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class ExecutionContext:
    """
    Immutable delegation state for one invocation tree.

    Every extension returns a new context. Sibling branches that start from
    the same ancestor keep independent chains, so no locking is needed when
    several delegations run concurrently.
    """

    call_chain: tuple[str, ...] = field(default_factory=tuple)
    hop_count: int = 0
    trace_id: str = ""

    @property
    def depth(self) -> int:
        return len(self.call_chain)

    def in_call_chain(self, agent_id: str) -> bool:
        """Check whether an agent was already visited on this path."""
        return agent_id in self.call_chain

    def with_call(self, agent_id: str) -> ExecutionContext:
        """Return a context with ``agent_id`` appended to the call chain."""
        return replace(self, call_chain=(*self.call_chain, agent_id))

    def with_hop(self) -> ExecutionContext:
        """Return a context with the hop count incremented."""
        return replace(self, hop_count=self.hop_count + 1)

    def enter(self, agent_id: str) -> ExecutionContext:
        """
        Record an agent starting its own run.

        A provider entered through a delegation tool is already the tail of
        the chain and is not recorded twice. The hop count is unchanged.
        """
        if self.call_chain and self.call_chain[-1] == agent_id:
            return self
        return self.with_call(agent_id)

    def with_trace_id(self, trace_id: str) -> ExecutionContext:
        return replace(self, trace_id=trace_id)

    def ensure_trace_id(self) -> ExecutionContext:
        """Return this context, or a copy carrying a fresh trace id if it has none."""
        if self.trace_id:
            return self
        return self.with_trace_id(str(uuid.uuid4()))


def new_context(trace_id: str = "") -> ExecutionContext:
    """Create an empty context for a top-level invocation."""
    return ExecutionContext(trace_id=trace_id)
