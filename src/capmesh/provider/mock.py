"""Deterministic providers for tests and offline wiring."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence

from capmesh.core.context import ExecutionContext
from capmesh.provider.base import ChatRequest, ChatResponse, StopReason

ChatFunc = Callable[[ExecutionContext, ChatRequest], Awaitable[ChatResponse]]


class MockProvider:
    """
    Provider whose replies come from a callable or a fixed script.

    Records every request it receives in ``requests``.
    """

    def __init__(self, chat_func: ChatFunc | None = None, name: str = "mock") -> None:
        self._chat_func = chat_func
        self._name = name
        self.requests: list[ChatRequest] = []

    @property
    def name(self) -> str:
        return self._name

    async def chat(self, ctx: ExecutionContext, request: ChatRequest) -> ChatResponse:
        self.requests.append(request)
        if self._chat_func is not None:
            return await self._chat_func(ctx, request)
        return ChatResponse(content="mock response", stop_reason=StopReason.END_TURN)

    @classmethod
    def with_response(cls, content: str) -> MockProvider:
        """Always answer with ``content``."""

        async def reply(ctx: ExecutionContext, request: ChatRequest) -> ChatResponse:
            return ChatResponse(content=content, stop_reason=StopReason.END_TURN)

        return cls(reply)

    @classmethod
    def scripted(cls, responses: Sequence[ChatResponse]) -> MockProvider:
        """Answer with ``responses`` in order, repeating the last one when exhausted."""
        if not responses:
            raise ValueError("scripted provider needs at least one response")
        remaining = list(responses)

        async def reply(ctx: ExecutionContext, request: ChatRequest) -> ChatResponse:
            if len(remaining) > 1:
                return remaining.pop(0)
            return remaining[0]

        return cls(reply)
