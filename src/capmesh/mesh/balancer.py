"""
Provider Selection - Balancers that pick one agent among several providers.

Round-robin keeps the only shared counter; the other strategies are pure.
"""

from __future__ import annotations

import itertools
import random
from collections.abc import Callable, Sequence
from enum import StrEnum
from typing import Protocol

from capmesh.core.types import Agent


class BalancerKind(StrEnum):
    """Selection strategies available from configuration."""

    ROUND_ROBIN = "round-robin"
    RANDOM = "random"
    FIRST = "first"


class Balancer(Protocol):
    """Selects one agent from a list of providers."""

    def select(self, agents: Sequence[Agent] | None) -> Agent | None: ...


class RoundRobinBalancer:
    """Distributes delegations evenly across providers."""

    def __init__(self) -> None:
        # next() on itertools.count is atomic under the interpreter lock
        self._counter = itertools.count()

    def select(self, agents: Sequence[Agent] | None) -> Agent | None:
        """Pick the next provider, modulo the length of this call's list."""
        if not agents:
            return None
        idx = next(self._counter)
        return agents[idx % len(agents)]


class RandomBalancer:
    """Selects a provider uniformly at random."""

    def __init__(self, rand_func: Callable[[int], int] | random.Random | None = None) -> None:
        if rand_func is None:
            rand_func = random.Random()
        if isinstance(rand_func, random.Random):
            rand_func = rand_func.randrange
        self._rand_func = rand_func

    def select(self, agents: Sequence[Agent] | None) -> Agent | None:
        if not agents:
            return None
        return agents[self._rand_func(len(agents))]


class FirstBalancer:
    """Always selects the first provider."""

    def select(self, agents: Sequence[Agent] | None) -> Agent | None:
        if not agents:
            return None
        return agents[0]


def new_balancer(kind: str | BalancerKind, seed: int | None = None) -> Balancer:
    """
    Build a balancer by configuration name.

    Args:
        kind: "round-robin", "random" or "first"
        seed: Seed for the random balancer (ignored by the others)

    Returns:
        A fresh balancer instance
    """
    try:
        kind = BalancerKind(kind)
    except ValueError:
        raise ValueError(f"unknown balancer: {kind}") from None

    if kind is BalancerKind.RANDOM:
        return RandomBalancer(random.Random(seed))
    if kind is BalancerKind.FIRST:
        return FirstBalancer()
    return RoundRobinBalancer()
