from __future__ import annotations

import importlib
import sys
import threading
from typing import Any

from twenty48_bench.bench.game import GameOutcome, GameSuccess


class GameProgressReporter:
    def on_game_complete(self, outcome: GameOutcome) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class NoopGameProgressReporter(GameProgressReporter):
    def on_game_complete(self, outcome: GameOutcome) -> None:  # noqa: ARG002
        return

    def close(self) -> None:
        return


class TqdmGameProgressReporter(GameProgressReporter):
    def __init__(
        self,
        *,
        total_games: int,
        refresh_s: float,
        tqdm_cls: Any,
    ) -> None:
        self._lock = threading.Lock()
        self._completed = 0
        self._failed = 0
        self._best_tile = 0
        self._bar = tqdm_cls(
            total=max(0, int(total_games)),
            desc="Games",
            unit="game",
            dynamic_ncols=True,
            mininterval=float(refresh_s),
            file=sys.stderr,
            leave=True,
        )

    def on_game_complete(self, outcome: GameOutcome) -> None:
        with self._lock:
            self._completed += 1
            if isinstance(outcome, GameSuccess):
                max_rank = outcome.grid.max_rank()
                if max_rank:
                    self._best_tile = max(self._best_tile, 1 << max_rank)
            else:
                self._failed += 1

            postfix = {
                "game": str(outcome.game_id),
                "moves": str(outcome.move_count),
                "best": str(self._best_tile),
                "errors": f"{self._failed}/{self._completed}",
            }
            self._bar.set_postfix(postfix, refresh=False)
            self._bar.update(1)

    def close(self) -> None:
        with self._lock:
            self._bar.close()


def build_game_progress_reporter(
    *,
    enabled: bool,
    total_games: int,
    refresh_s: float,
    explicit_request: bool,
) -> GameProgressReporter:
    if not enabled or total_games <= 0:
        return NoopGameProgressReporter()

    try:
        tqdm_module = importlib.import_module("tqdm")
    except ImportError:
        if explicit_request:
            print(
                "Progress requested but missing dependency: tqdm. Install with "
                "pip install 'twenty48-bench[bench]'.",
                file=sys.stderr,
                flush=True,
            )
        return NoopGameProgressReporter()

    tqdm_cls = getattr(tqdm_module, "tqdm", None)
    if tqdm_cls is None:
        if explicit_request:
            print(
                "Progress requested but tqdm could not be loaded. Install with "
                "pip install 'twenty48-bench[bench]'.",
                file=sys.stderr,
                flush=True,
            )
        return NoopGameProgressReporter()
    return TqdmGameProgressReporter(
        total_games=total_games,
        refresh_s=refresh_s,
        tqdm_cls=tqdm_cls,
    )
