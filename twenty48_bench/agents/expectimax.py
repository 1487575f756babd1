from __future__ import annotations

import random
import time
from dataclasses import dataclass

from twenty48_bench.games.twenty48 import (
    ALL_DIRECTIONS,
    Direction,
    PlacementBoard,
    PlayableBoard,
)

from .base import Strategy

# Value of a board on which no direction can be played.
LOSS_SCORE = 0.0


@dataclass(slots=True)
class SearchStats:
    """Counters accumulated across the nested calls of one search."""

    num_evals: int = 0

    def merge(self, other: SearchStats) -> None:
        self.num_evals += other.num_evals

    def __str__(self) -> str:
        return f"Num evals: {self.num_evals}"


class ExpectimaxStrategy(Strategy):
    """Depth-bounded expectimax over the evaluator.

    `depth` counts player actions: each legal direction is scored by the
    expected value of the chance step that follows it, recursing through
    `depth - 1` further actions before falling back to `evaluate`. With
    `depth=1` this plays exactly like the greedy strategy. Once `deadline`
    passes, every pending chance node is scored with `evaluate` directly.
    """

    name = "expectimax"

    def __init__(self, depth: int = 2) -> None:
        if isinstance(depth, bool) or not isinstance(depth, int):
            raise ValueError(f"depth must be int, got {type(depth).__name__}")
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        self.depth = depth
        self.last_stats = SearchStats()
        self.total_stats = SearchStats()

    def describe(self) -> dict[str, object]:
        return {"name": self.name, "depth": self.depth}

    def evaluation_count(self) -> int:
        return self.total_stats.num_evals

    def select(
        self,
        board: PlayableBoard,
        *,
        rng: random.Random,  # noqa: ARG002
        deadline: float | None = None,
    ) -> Direction | None:
        stats = SearchStats()
        best: Direction | None = None
        best_score = float("-inf")
        for direction in ALL_DIRECTIONS:
            played = board.apply(direction)
            if played is None:
                continue
            score = self._evaluate_placement(played, self.depth - 1, stats, deadline)
            if best is None or score > best_score:
                best = direction
                best_score = score
        self.last_stats = stats
        self.total_stats.merge(stats)
        return best

    def _evaluate_placement(
        self,
        board: PlacementBoard,
        remaining_actions: int,
        stats: SearchStats,
        deadline: float | None,
    ) -> float:
        if remaining_actions == 0 or _expired(deadline):
            stats.num_evals += 1
            return board.evaluate()
        expected = 0.0
        for probability, successor in board.successors():
            expected += probability * self._evaluate_playable(
                successor, remaining_actions, stats, deadline
            )
        return expected

    def _evaluate_playable(
        self,
        board: PlayableBoard,
        remaining_actions: int,
        stats: SearchStats,
        deadline: float | None,
    ) -> float:
        best = LOSS_SCORE
        found = False
        for direction in ALL_DIRECTIONS:
            played = board.apply(direction)
            if played is None:
                continue
            score = self._evaluate_placement(
                played, remaining_actions - 1, stats, deadline
            )
            if not found or score > best:
                best = score
                found = True
        return best


def _expired(deadline: float | None) -> bool:
    return deadline is not None and time.monotonic() > deadline
