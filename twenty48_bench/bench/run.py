from __future__ import annotations

import argparse
import functools
import json
from pathlib import Path

from twenty48_bench.bench.common import (
    BenchSettings,
    add_run_arguments,
    resolve_bench_settings,
    resolve_config,
    resolve_progress_settings,
)
from twenty48_bench.bench.executor import derive_game_seeds, run_game_jobs
from twenty48_bench.bench.game import GameJob, GameOutcome, GameSuccess, run_game
from twenty48_bench.bench.progress import build_game_progress_reporter
from twenty48_bench.bench.scoring import (
    AggregateReport,
    compute_report,
    format_outcome,
    format_report,
)
from twenty48_bench.games.twenty48 import render_board_image


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="twenty48-bench run",
        description="Play many 2048 games concurrently and report tile reach rates.",
    )
    add_run_arguments(parser)
    return parser


def build_jobs(settings: BenchSettings) -> list[GameJob]:
    seeds = derive_game_seeds(settings.seed, settings.num_games)
    return [
        GameJob(
            game_id=game_id,
            seed=seed,
            timeout_s=settings.timeout_s,
            strategy=settings.strategy,
        )
        for game_id, seed in enumerate(seeds)
    ]


def run_benchmark(
    settings: BenchSettings,
    *,
    progress_reporter=None,
    verbose: bool = False,
) -> tuple[list[GameOutcome], AggregateReport]:
    jobs = build_jobs(settings)
    run_job = functools.partial(run_game, verbose=verbose) if verbose else run_game
    outcomes = run_game_jobs(
        jobs=jobs,
        run_job=run_job,
        parallelism=min(settings.parallelism, max(1, len(jobs))),
        progress_reporter=progress_reporter,
    )
    return outcomes, compute_report(outcomes)


def _write_final_boards(outcomes: list[GameOutcome], render_dir: Path) -> list[Path]:
    render_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for outcome in outcomes:
        if not isinstance(outcome, GameSuccess):
            continue
        image = render_board_image(outcome.grid)
        written.append(image.write(render_dir / f"game_{outcome.game_id:04d}.png"))
    return written


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = resolve_config(args)
    settings = resolve_bench_settings(args, config)
    progress_enabled, progress_refresh_s, progress_explicit = resolve_progress_settings(
        args, config
    )

    reporter = build_game_progress_reporter(
        enabled=progress_enabled,
        total_games=settings.num_games,
        refresh_s=progress_refresh_s,
        explicit_request=progress_explicit,
    )
    try:
        outcomes, report = run_benchmark(
            settings, progress_reporter=reporter, verbose=args.verbose
        )
    finally:
        reporter.close()

    for outcome in outcomes:
        print(format_outcome(outcome))
    print(format_report(report))

    if args.render_dir:
        for path in _write_final_boards(outcomes, Path(args.render_dir)):
            print(f"Wrote {path}")

    if args.json:
        payload = {
            "strategy": settings.strategy.describe(),
            "timeout_s": settings.timeout_s,
            "num_games": settings.num_games,
            "seed": settings.seed,
            "parallelism": settings.parallelism,
            "outcomes": [outcome.to_dict() for outcome in outcomes],
            "report": report.to_dict(),
        }
        print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
