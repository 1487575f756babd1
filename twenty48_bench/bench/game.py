from __future__ import annotations

import random
import sys
import time
from dataclasses import dataclass
from typing import Any, TypeAlias

from twenty48_bench.agents import Strategy
from twenty48_bench.games.twenty48 import (
    Direction,
    Grid,
    IllegalMoveError,
    PlacementBoard,
    PlayableBoard,
)


@dataclass(frozen=True, slots=True)
class GameJob:
    game_id: int
    seed: int
    timeout_s: float
    strategy: Strategy


@dataclass(frozen=True, slots=True)
class GameSuccess:
    game_id: int
    seed: int
    move_count: int
    grid: Grid
    timed_out: bool = False
    elapsed_s: float = 0.0
    num_evals: int | None = None

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_id": self.game_id,
            "seed": self.seed,
            "ok": True,
            "move_count": self.move_count,
            "timed_out": self.timed_out,
            "elapsed_s": self.elapsed_s,
            "num_evals": self.num_evals,
            "grid": self.grid.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class GameFailure:
    """A game that stopped on a defect.

    `direction` is the out-of-contract value returned by the strategy, or None
    when the failure came from somewhere else (an exception in the strategy,
    a broken worker).
    """

    game_id: int
    seed: int
    move_count: int
    direction: object | None
    grid: Grid | None
    error: str
    num_evals: int | None = None

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "game_id": self.game_id,
            "seed": self.seed,
            "ok": False,
            "move_count": self.move_count,
            "direction": None if self.direction is None else str(self.direction),
            "grid": None if self.grid is None else self.grid.to_dict(),
            "error": self.error,
            "num_evals": self.num_evals,
        }


GameOutcome: TypeAlias = GameSuccess | GameFailure


def _play_direction(board: PlayableBoard, direction: object) -> PlacementBoard:
    if not isinstance(direction, Direction):
        raise IllegalMoveError(
            direction,
            board.grid,
            f"Got out-of-contract action {direction!r} on board {board.grid.to_values()}",
        )
    played = board.apply(direction)
    if played is None:
        raise IllegalMoveError(direction, board.grid)
    return played


def _evals_since(strategy: Strategy, before: int | None) -> int | None:
    after = strategy.evaluation_count()
    if after is None:
        return None
    return after - (before or 0)


def run_game(job: GameJob, *, verbose: bool = False) -> GameOutcome:
    """Play one game until no direction is legal or `job.timeout_s` elapses.

    Running out of time is not an error: the game stops with the board it has.
    Anything else that stops the game early (a rejected direction, an
    exception raised by the strategy or the game model) becomes a GameFailure
    holding the move count and the last board reached.
    """

    rng = random.Random(job.seed)
    start = time.monotonic()
    deadline = start + job.timeout_s
    evals_before = job.strategy.evaluation_count()
    move_count = 0
    board = PlayableBoard.init(rng)
    # Board the game was at when it stopped; a placement board mid-turn.
    last_grid = board.grid

    def failure(direction: object | None, grid: Grid | None, error: str) -> GameFailure:
        return GameFailure(
            game_id=job.game_id,
            seed=job.seed,
            move_count=move_count,
            direction=direction,
            grid=grid,
            error=error,
            num_evals=_evals_since(job.strategy, evals_before),
        )

    try:
        while True:
            direction = job.strategy.select(board, rng=rng, deadline=deadline)
            if direction is None:
                if verbose:
                    print(
                        f"[game {job.game_id}] End game // num moves {move_count}",
                        file=sys.stderr,
                        flush=True,
                    )
                return GameSuccess(
                    game_id=job.game_id,
                    seed=job.seed,
                    move_count=move_count,
                    grid=board.grid,
                    timed_out=False,
                    elapsed_s=time.monotonic() - start,
                    num_evals=_evals_since(job.strategy, evals_before),
                )

            elapsed = time.monotonic() - start
            if elapsed > job.timeout_s:
                if verbose:
                    print(
                        f"[game {job.game_id}] Timeout // num moves: {move_count}",
                        file=sys.stderr,
                        flush=True,
                    )
                return GameSuccess(
                    game_id=job.game_id,
                    seed=job.seed,
                    move_count=move_count,
                    grid=board.grid,
                    timed_out=True,
                    elapsed_s=elapsed,
                    num_evals=_evals_since(job.strategy, evals_before),
                )

            played = _play_direction(board, direction)
            last_grid = played.grid
            board = played.with_random_tile(rng)
            last_grid = board.grid
            move_count += 1
    except IllegalMoveError as exc:
        return failure(exc.direction, exc.grid, str(exc))
    except Exception as exc:
        return failure(None, last_grid, f"{type(exc).__name__}: {exc}")
