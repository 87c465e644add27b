"""Tests for the execution context."""

from __future__ import annotations

import dataclasses

import pytest

from capmesh.core.context import ExecutionContext, new_context


class TestExecutionContext:
    def test_new_context_is_empty(self) -> None:
        ctx = new_context()
        assert ctx.call_chain == ()
        assert ctx.hop_count == 0
        assert ctx.trace_id == ""
        assert ctx.depth == 0

    def test_with_call_appends(self) -> None:
        ctx = new_context().with_call("a").with_call("b")
        assert ctx.call_chain == ("a", "b")
        assert ctx.hop_count == 0

    def test_with_hop_increments(self) -> None:
        ctx = new_context().with_hop().with_hop()
        assert ctx.hop_count == 2
        assert ctx.call_chain == ()

    def test_extension_never_mutates_parent(self) -> None:
        """Sibling branches from one ancestor stay independent."""
        parent = new_context("trace-1").with_call("root")

        left = parent.with_call("A").with_hop()
        right = parent.with_call("B").with_hop()

        assert parent.call_chain == ("root",)
        assert parent.hop_count == 0
        assert left.call_chain == ("root", "A")
        assert right.call_chain == ("root", "B")
        assert left.trace_id == right.trace_id == "trace-1"

    def test_context_is_frozen(self) -> None:
        ctx = new_context()
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.hop_count = 5  # type: ignore[misc]

    def test_in_call_chain(self) -> None:
        ctx = new_context().with_call("a").with_call("b")
        assert ctx.in_call_chain("a")
        assert ctx.in_call_chain("b")
        assert not ctx.in_call_chain("c")

    def test_enter_skips_duplicate_tail(self) -> None:
        ctx = new_context().with_call("writer")
        assert ctx.enter("writer") is ctx
        assert ctx.enter("researcher").call_chain == ("writer", "researcher")

    def test_enter_does_not_count_hops(self) -> None:
        ctx = new_context().enter("writer")
        assert ctx.call_chain == ("writer",)
        assert ctx.hop_count == 0

    def test_ensure_trace_id_generates_once(self) -> None:
        ctx = new_context().ensure_trace_id()
        assert ctx.trace_id
        assert ctx.ensure_trace_id() is ctx

    def test_ensure_trace_id_keeps_existing(self) -> None:
        ctx = ExecutionContext(trace_id="fixed")
        assert ctx.ensure_trace_id().trace_id == "fixed"
