from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .base import Strategy
from .expectimax import LOSS_SCORE, ExpectimaxStrategy, SearchStats
from .greedy import GreedyStrategy
from .uniform import UniformRandomStrategy


@dataclass(frozen=True, slots=True)
class StrategySpec:
    name: str
    description: str
    factory: Callable[..., Strategy]
    options: tuple[str, ...] = ()


_REGISTRY: dict[str, StrategySpec] = {}

DEFAULT_STRATEGY = "random"


def register_strategy(spec: StrategySpec) -> None:
    _REGISTRY[spec.name] = spec


def get_strategy(name: str) -> StrategySpec:
    if name not in _REGISTRY:
        raise KeyError(f"Unknown strategy: {name}")
    return _REGISTRY[name]


def list_strategies() -> list[str]:
    return sorted(_REGISTRY.keys())


def build_strategy(name: str, options: dict[str, Any] | None = None) -> Strategy:
    spec = get_strategy(name)
    options = dict(options or {})
    unknown = sorted(set(options) - set(spec.options))
    if unknown:
        raise ValueError(
            f"Unknown option(s) for strategy '{name}': {', '.join(unknown)}"
        )
    return spec.factory(**options)


register_strategy(
    StrategySpec(
        name="random",
        description="Uniformly random legal direction",
        factory=UniformRandomStrategy,
    )
)
register_strategy(
    StrategySpec(
        name="greedy",
        description="Best evaluated direction, one ply",
        factory=GreedyStrategy,
    )
)
register_strategy(
    StrategySpec(
        name="expectimax",
        description="Depth-bounded expectimax over the evaluator",
        factory=ExpectimaxStrategy,
        options=("depth",),
    )
)

__all__ = [
    "DEFAULT_STRATEGY",
    "ExpectimaxStrategy",
    "GreedyStrategy",
    "LOSS_SCORE",
    "SearchStats",
    "Strategy",
    "StrategySpec",
    "UniformRandomStrategy",
    "build_strategy",
    "get_strategy",
    "list_strategies",
    "register_strategy",
]
