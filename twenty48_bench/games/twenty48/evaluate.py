from __future__ import annotations

from typing import Sequence

from .grid import Grid, PreconditionError

NOT_LOST = 200_000.0
MONOTONICITY_WEIGHT = 47.0
EMPTY_WEIGHT = 270.0
ADJACENT_WEIGHT = 700.0
SUM_WEIGHT = 11.0

# POW_3_5_LOOKUP[i] == i ** 3.5 for every rank a 4x4 game can reach.
POW_3_5_LOOKUP: tuple[float, ...] = (
    0.0,
    1.0,
    11.313708,
    46.765373,
    128.0,
    279.50848,
    529.0898,
    907.4927,
    1448.1547,
    2187.0,
    3162.2776,
    4414.4277,
    5985.968,
    7921.396,
    10267.107,
    13071.318,
    16384.0,
    20256.818,
)


def evaluate(grid: Grid) -> float:
    """Heuristic desirability of a grid: higher is better.

    The score is the sum of `eval_row` over every row and every column.
    """

    rows_total = 0.0
    for row in grid.cells:
        rows_total += eval_row(row)
    cols_total = 0.0
    for col in grid.transposed().cells:
        cols_total += eval_row(col)
    # Summing the two halves last keeps evaluate(g) == evaluate(g.transposed()).
    return rows_total + cols_total


def eval_row(row: Sequence[int]) -> float:
    return (
        NOT_LOST
        + monotonicity(row) * MONOTONICITY_WEIGHT
        + empty(row) * EMPTY_WEIGHT
        + adjacent(row) * ADJACENT_WEIGHT
        + tile_sum(row) * SUM_WEIGHT
    )


def empty(row: Sequence[int]) -> float:
    return float(sum(1 for rank in row if rank == 0))


def monotonicity(row: Sequence[int]) -> float:
    """Minus the cheapest of the decreasing and increasing costs of the row."""

    left = 0
    right = 0
    for current, nxt in zip(row, row[1:]):
        if current > nxt:
            left += current**4 - nxt**4
        elif nxt > current:
            right += nxt**4 - current**4
    return -float(min(left, right))


def adjacent(row: Sequence[int]) -> float:
    count = 0
    i = 0
    while i < len(row) - 1:
        if row[i] != 0 and row[i] == row[i + 1]:
            count += 1
            i += 2
        else:
            i += 1
    return float(count)


def tile_sum(row: Sequence[int]) -> float:
    total = 0.0
    for rank in row:
        if rank < 0 or rank >= len(POW_3_5_LOOKUP):
            raise PreconditionError(
                f"rank {rank} is outside the evaluation table [0, {len(POW_3_5_LOOKUP) - 1}]"
            )
        total += POW_3_5_LOOKUP[rank]
    return -total
