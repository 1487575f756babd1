from __future__ import annotations

import os
import random
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any, Callable

import psutil

from twenty48_bench.bench.game import GameFailure, GameJob, GameOutcome


def default_parallelism() -> int:
    """Number of physical cores, or logical ones when psutil cannot tell."""

    physical = psutil.cpu_count(logical=False)
    if physical:
        return int(physical)
    return os.cpu_count() or 1


def derive_game_seeds(base_seed: int | None, count: int) -> list[int]:
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    source = random.Random(base_seed)
    return [source.getrandbits(63) for _ in range(count)]


def _collect_job_game_ids(jobs: list[GameJob]) -> list[int]:
    game_ids: list[int] = []
    seen: set[int] = set()
    for job in jobs:
        if job.game_id in seen:
            raise SystemExit(
                f"Duplicate game_id detected in job plan: {job.game_id}. "
                "Each job must have a unique game_id."
            )
        seen.add(job.game_id)
        game_ids.append(job.game_id)
    return game_ids


def _crashed(job: GameJob, exc: BaseException) -> GameFailure:
    return GameFailure(
        game_id=job.game_id,
        seed=job.seed,
        move_count=0,
        direction=None,
        grid=None,
        error=f"{type(exc).__name__}: {exc}",
    )


def run_game_jobs(
    *,
    jobs: list[GameJob],
    run_job: Callable[[GameJob], GameOutcome],
    parallelism: int,
    progress_reporter: Any | None = None,
) -> list[GameOutcome]:
    """Run every job and return one outcome per job, ordered by game_id.

    With parallelism > 1 the jobs go to a process pool; `run_job` and the jobs
    must then be picklable. An exception escaping `run_job` becomes a
    GameFailure for that job and never stops the other games.
    """

    if parallelism < 1:
        raise SystemExit(f"parallelism must be >= 1, got {parallelism}")
    _collect_job_game_ids(jobs)

    outcomes: list[GameOutcome] = []

    def commit_output(outcome: GameOutcome) -> None:
        outcomes.append(outcome)
        if progress_reporter is not None:
            progress_reporter.on_game_complete(outcome)

    if parallelism == 1:
        for job in jobs:
            try:
                outcome = run_job(job)
            except Exception as exc:
                outcome = _crashed(job, exc)
            commit_output(outcome)
    else:
        with ProcessPoolExecutor(max_workers=parallelism) as executor:
            future_map = {executor.submit(run_job, job): job for job in jobs}
            for future in as_completed(future_map):
                job = future_map[future]
                try:
                    outcome = future.result()
                except Exception as exc:
                    outcome = _crashed(job, exc)
                if outcome.game_id != job.game_id:
                    raise SystemExit(
                        "Game output game_id mismatch for parallel execution: "
                        f"expected {job.game_id}, got {outcome.game_id}."
                    )
                commit_output(outcome)

    return sorted(outcomes, key=lambda outcome: outcome.game_id)
