from __future__ import annotations

import random

from twenty48_bench.games.twenty48 import ALL_DIRECTIONS, Direction, PlayableBoard

from .base import Strategy


class GreedyStrategy(Strategy):
    """Plays the direction whose resulting board evaluates best (one ply).

    The chance step is ignored. Ties go to the first direction in
    ALL_DIRECTIONS order.
    """

    name = "greedy"

    def select(
        self,
        board: PlayableBoard,
        *,
        rng: random.Random,  # noqa: ARG002
        deadline: float | None = None,  # noqa: ARG002
    ) -> Direction | None:
        best: Direction | None = None
        best_score = float("-inf")
        for direction in ALL_DIRECTIONS:
            played = board.apply(direction)
            if played is None:
                continue
            score = played.evaluate()
            if best is None or score > best_score:
                best = direction
                best_score = score
        return best
