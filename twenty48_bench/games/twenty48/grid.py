from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence, TypeAlias

Rank: TypeAlias = int
Row: TypeAlias = tuple[Rank, ...]
Cell: TypeAlias = tuple[int, int]

SIZE = 4
# Ranks are stored as unsigned bytes.
MAX_STORED_RANK = 255


class Twenty48Error(Exception):
    """Base exception for the 2048 game model."""


class InvalidGridError(Twenty48Error, ValueError):
    """Raised when a grid does not have the 4x4 shape or holds invalid ranks."""


class PreconditionError(Twenty48Error):
    """Raised when a caller breaks a documented precondition (a defect)."""


class IllegalMoveError(Twenty48Error):
    """Raised when a direction does not change the board it is applied to."""

    def __init__(self, direction: Any, grid: "Grid", message: str | None = None) -> None:
        self.direction = direction
        self.grid = grid
        if message is None:
            message = f"Got inapplicable action {direction!r} on board {grid.to_values()}"
        super().__init__(message)


def _validate_rank(rank: object) -> Rank:
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise InvalidGridError(f"rank must be int, got {type(rank).__name__}")
    if rank < 0 or rank > MAX_STORED_RANK:
        raise InvalidGridError(f"rank must be in [0, {MAX_STORED_RANK}], got {rank}")
    return rank


def _validate_rows(rows: Iterable[Iterable[object]]) -> tuple[Row, ...]:
    validated = tuple(tuple(_validate_rank(rank) for rank in row) for row in rows)
    if len(validated) != SIZE or any(len(row) != SIZE for row in validated):
        shape = [len(row) for row in validated]
        raise InvalidGridError(f"grid must be {SIZE}x{SIZE}, got row lengths {shape}")
    return validated


@dataclass(frozen=True, slots=True)
class Grid:
    """Immutable 4x4 matrix of tile ranks.

    Rank 0 is an empty cell and rank r > 0 is the tile 2^r. Rows are listed
    top to bottom and cells left to right; every operation returns a new grid.
    """

    cells: tuple[Row, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", _validate_rows(self.cells))

    @classmethod
    def empty(cls) -> Grid:
        """The completely empty grid (not the initial board of a game)."""

        return cls(tuple((0,) * SIZE for _ in range(SIZE)))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Grid:
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def from_values(cls, rows: Sequence[Sequence[int]]) -> Grid:
        """Build a grid from tile values (0, 2, 4, 8, ...) instead of ranks."""

        ranked = []
        for row in rows:
            ranked_row = []
            for value in row:
                if value == 0:
                    ranked_row.append(0)
                    continue
                if value < 2 or value & (value - 1):
                    raise InvalidGridError(f"tile value must be a power of two, got {value}")
                ranked_row.append(value.bit_length() - 1)
            ranked.append(tuple(ranked_row))
        return cls(tuple(ranked))

    def num_empty(self) -> int:
        return sum(1 for row in self.cells for rank in row if rank == 0)

    def empty_cells(self) -> list[Cell]:
        """Coordinates of every empty cell in row-major order."""

        return [
            (i, j)
            for i, row in enumerate(self.cells)
            for j, rank in enumerate(row)
            if rank == 0
        ]

    def with_cell(self, row: int, col: int, rank: Rank) -> Grid:
        updated = [list(r) for r in self.cells]
        updated[row][col] = rank
        return Grid(tuple(tuple(r) for r in updated))

    def transposed(self) -> Grid:
        """Swap lines and columns. Applying it twice gives back the same grid."""

        return Grid(tuple(zip(*self.cells)))

    def mirrored(self) -> Grid:
        """Swap left and right. Applying it twice gives back the same grid."""

        return Grid(tuple(row[::-1] for row in self.cells))

    def max_rank(self) -> Rank:
        return max(rank for row in self.cells for rank in row)

    def has_at_least(self, rank: Rank) -> bool:
        return any(cell >= rank for row in self.cells for cell in row)

    def to_values(self) -> list[list[int]]:
        return [[(1 << rank) if rank else 0 for rank in row] for row in self.cells]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ranks": [list(row) for row in self.cells],
            "values": self.to_values(),
            "max_tile": (1 << self.max_rank()) if self.max_rank() else 0,
        }
