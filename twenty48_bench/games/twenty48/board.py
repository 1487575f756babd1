from __future__ import annotations

import random
from dataclasses import dataclass

from .evaluate import evaluate
from .grid import Grid, Rank
from .moves import Direction, apply_direction, legal_directions
from .placement import enumerate_successors, place_random_tile
from .render import format_grid


@dataclass(frozen=True, slots=True)
class PlayableBoard:
    """A board on which the next thing to do is to play a direction."""

    grid: Grid

    @classmethod
    def init(cls, rng: random.Random) -> PlayableBoard:
        """Initial board of a game: a single random tile on an empty grid."""

        return cls(place_random_tile(Grid.empty(), rng))

    def apply(self, direction: Direction) -> PlacementBoard | None:
        moved = apply_direction(self.grid, direction)
        if moved is None:
            return None
        return PlacementBoard(moved)

    def legal_directions(self) -> list[Direction]:
        return legal_directions(self.grid)

    def is_terminal(self) -> bool:
        return not self.legal_directions()

    def has_at_least_tile(self, rank: Rank) -> bool:
        return self.grid.has_at_least(rank)

    def __str__(self) -> str:
        return format_grid(self.grid)


@dataclass(frozen=True, slots=True)
class PlacementBoard:
    """A board on which the next thing to do is to place a random tile."""

    grid: Grid

    def with_random_tile(self, rng: random.Random) -> PlayableBoard:
        return PlayableBoard(place_random_tile(self.grid, rng))

    def successors(self) -> list[tuple[float, PlayableBoard]]:
        """Every board the chance step may produce, with its probability."""

        return [
            (probability, PlayableBoard(grid))
            for probability, grid in enumerate_successors(self.grid)
        ]

    def evaluate(self) -> float:
        return evaluate(self.grid)

    def __str__(self) -> str:
        return format_grid(self.grid)
