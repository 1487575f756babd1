from __future__ import annotations

from .grid import SIZE, Grid

CELL_WIDTH = 7


def _format_cell(rank: int) -> str:
    if rank == 0:
        return ".".center(CELL_WIDTH)
    return str(1 << rank).center(CELL_WIDTH)


def format_grid(grid: Grid) -> str:
    """Plain box-drawing rendering of a grid, one line per row."""

    border = "═" * ((CELL_WIDTH + 1) * SIZE)
    lines = [f"╔═{border}╗"]
    for row in grid.cells:
        lines.append("║ " + "".join(_format_cell(rank) + " " for rank in row) + "║")
    lines.append(f"╚═{border}╝")
    return "\n".join(lines)
