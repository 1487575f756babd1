"""2048 game model, strategies and benchmark harness."""

from __future__ import annotations

from .games.twenty48 import (
    ALL_DIRECTIONS,
    Direction,
    Grid,
    PlacementBoard,
    PlayableBoard,
    evaluate,
)

__all__ = [
    "ALL_DIRECTIONS",
    "Direction",
    "Grid",
    "PlacementBoard",
    "PlayableBoard",
    "evaluate",
]
