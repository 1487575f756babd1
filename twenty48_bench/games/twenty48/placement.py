from __future__ import annotations

import random

from .grid import Grid, PreconditionError, Rank

# (rank, probability) of the tile added after each move: 2 w.p. 0.9, 4 w.p. 0.1.
NEW_TILE_DISTRIBUTION: tuple[tuple[Rank, float], ...] = ((1, 0.9), (2, 0.1))


def _require_empty_cell(grid: Grid) -> int:
    n_empty = grid.num_empty()
    if n_empty == 0:
        raise PreconditionError(
            "cannot place a tile on a full grid; a terminal board must be "
            "detected before the chance step"
        )
    return n_empty


def place_random_tile(grid: Grid, rng: random.Random) -> Grid:
    """Place a 2 or a 4 on an empty cell picked uniformly at random."""

    n_empty = _require_empty_cell(grid)
    picked = rng.randrange(n_empty)
    row, col = grid.empty_cells()[picked]
    rank = 1 if rng.random() < NEW_TILE_DISTRIBUTION[0][1] else 2
    return grid.with_cell(row, col, rank)


def enumerate_successors(grid: Grid) -> list[tuple[float, Grid]]:
    """Every grid the chance step can produce, with its probability.

    Entries are listed per empty cell in row-major order, rank 1 before rank 2,
    so two calls on the same grid always return the same list.
    """

    n_empty = _require_empty_cell(grid)
    return [
        (probability / n_empty, grid.with_cell(row, col, rank))
        for row, col in grid.empty_cells()
        for rank, probability in NEW_TILE_DISTRIBUTION
    ]
