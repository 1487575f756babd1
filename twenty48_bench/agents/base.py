from __future__ import annotations

import random

from twenty48_bench.games.twenty48 import Direction, PlayableBoard


class Strategy:
    """Chooses the direction to play on a board.

    `select` must return None exactly when the board has no legal direction.
    `rng` is the random source owned by the current game and `deadline` is an
    optional `time.monotonic()` timestamp after which a search should stop
    deepening and answer with what it has.
    """

    name = "strategy"

    def select(
        self,
        board: PlayableBoard,
        *,
        rng: random.Random,
        deadline: float | None = None,
    ) -> Direction | None:
        raise NotImplementedError

    def describe(self) -> dict[str, object]:
        return {"name": self.name}

    def evaluation_count(self) -> int | None:
        """Board evaluations made so far, or None for strategies that don't count."""

        return None
