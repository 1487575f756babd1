from __future__ import annotations

import random

from twenty48_bench.games.twenty48 import Direction, PlayableBoard

from .base import Strategy


class UniformRandomStrategy(Strategy):
    name = "random"

    def select(
        self,
        board: PlayableBoard,
        *,
        rng: random.Random,
        deadline: float | None = None,  # noqa: ARG002
    ) -> Direction | None:
        applicable = board.legal_directions()
        if not applicable:
            return None
        return rng.choice(applicable)
