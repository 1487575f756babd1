from __future__ import annotations

from .board import PlacementBoard, PlayableBoard
from .evaluate import evaluate, eval_row
from .grid import (
    MAX_STORED_RANK,
    SIZE,
    Grid,
    IllegalMoveError,
    InvalidGridError,
    PreconditionError,
    Rank,
    Row,
    Twenty48Error,
)
from .moves import (
    ALL_DIRECTIONS,
    Direction,
    InvalidDirectionError,
    apply_direction,
    legal_directions,
    parse_direction,
    push_left_row,
)
from .placement import NEW_TILE_DISTRIBUTION, enumerate_successors, place_random_tile
from .render import format_grid
from .vision import render_board_image, render_grid_image
from ..vision_types import StateImage

__all__ = [
    "ALL_DIRECTIONS",
    "Direction",
    "Grid",
    "IllegalMoveError",
    "InvalidDirectionError",
    "InvalidGridError",
    "MAX_STORED_RANK",
    "NEW_TILE_DISTRIBUTION",
    "PlacementBoard",
    "PlayableBoard",
    "PreconditionError",
    "Rank",
    "Row",
    "SIZE",
    "StateImage",
    "Twenty48Error",
    "apply_direction",
    "enumerate_successors",
    "eval_row",
    "evaluate",
    "format_grid",
    "legal_directions",
    "parse_direction",
    "place_random_tile",
    "push_left_row",
    "render_board_image",
    "render_grid_image",
]
