from __future__ import annotations

from enum import Enum
from typing import Sequence

from .grid import Grid, Row, Twenty48Error


class InvalidDirectionError(Twenty48Error, ValueError):
    """Raised when a value cannot be interpreted as a direction."""


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    def __str__(self) -> str:
        return self.name.capitalize()


ALL_DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


def parse_direction(value: object) -> Direction:
    """Accept a Direction, its name/value (any case) or its index in ALL_DIRECTIONS."""

    if isinstance(value, Direction):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < len(ALL_DIRECTIONS):
            return ALL_DIRECTIONS[value]
        raise InvalidDirectionError(
            f"direction int must be in [0, {len(ALL_DIRECTIONS) - 1}], got {value}"
        )
    if isinstance(value, str):
        token = value.strip().lower()
        for direction in ALL_DIRECTIONS:
            if token == direction.value:
                return direction
    raise InvalidDirectionError(
        f"direction must be one of {[d.value for d in ALL_DIRECTIONS]}, got {value!r}"
    )


def push_left_row(row: Sequence[int]) -> Row:
    """Play "left" on a single row.

    Nonzero ranks slide left keeping their order. Each tile merges with the
    next nonzero tile when both have the same rank; the merged tile does not
    merge again in the same pass. Cells left over on the right become empty.
    """

    tiles = [rank for rank in row if rank != 0]
    pushed: list[int] = []
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            pushed.append(tiles[i] + 1)
            i += 2
        else:
            pushed.append(tiles[i])
            i += 1
    pushed.extend([0] * (len(row) - len(pushed)))
    return tuple(pushed)


def _push_left(grid: Grid) -> Grid:
    return Grid(tuple(push_left_row(row) for row in grid.cells))


def apply_direction(grid: Grid, direction: Direction) -> Grid | None:
    """Return the grid resulting from `direction`, or None if nothing moves."""

    # Only "left" is implemented; the other directions go through symmetries.
    if direction is Direction.LEFT:
        moved = _push_left(grid)
    elif direction is Direction.RIGHT:
        moved = _push_left(grid.mirrored()).mirrored()
    elif direction is Direction.UP:
        moved = _push_left(grid.transposed()).transposed()
    elif direction is Direction.DOWN:
        moved = _push_left(grid.transposed().mirrored()).mirrored().transposed()
    else:
        raise InvalidDirectionError(f"unknown direction {direction!r}")

    if moved == grid:
        return None
    return moved


def legal_directions(grid: Grid) -> list[Direction]:
    return [d for d in ALL_DIRECTIONS if apply_direction(grid, d) is not None]
