from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Any

from twenty48_bench.agents import (
    DEFAULT_STRATEGY,
    Strategy,
    build_strategy,
    list_strategies,
)
from twenty48_bench.bench.executor import default_parallelism
from twenty48_bench.config import (
    DEFAULT_NUM_GAMES,
    DEFAULT_TIMEOUT_S,
    default_bench_config,
    load_config,
    merge_dicts,
)


@dataclass(frozen=True, slots=True)
class BenchSettings:
    timeout_s: float
    num_games: int
    strategy: Strategy
    strategy_name: str
    strategy_options: dict[str, Any]
    seed: int | None
    parallelism: int


def add_run_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=None,
        help="Time in seconds allowed for a single game (default 600).",
    )
    parser.add_argument(
        "-n",
        "--num-games",
        type=int,
        default=None,
        help="Number of games to play (default 8).",
    )
    parser.add_argument(
        "--strategy",
        choices=list_strategies(),
        default=None,
        help="Strategy used to choose each direction (default: random).",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Search depth in actions for --strategy expectimax (default 2).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base seed; per-game seeds are derived from it for reproducible runs.",
    )
    parser.add_argument(
        "--parallelism",
        type=int,
        default=None,
        help="Number of worker processes (default: number of physical cores).",
    )
    parser.add_argument(
        "--config", help="Path to JSON config with defaults for these options."
    )
    parser.add_argument(
        "--progress",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show a progress bar on stderr. Defaults to enabled on TTY stderr.",
    )
    parser.add_argument(
        "--progress-refresh-s",
        type=float,
        default=None,
        help="Minimum seconds between progress refreshes (default 0.25).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print a line on stderr when each game ends.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Also print the outcomes and the report as JSON.",
    )
    parser.add_argument(
        "--render-dir",
        default=None,
        help="Write a PNG of every successful final board into this directory.",
    )


def _resolve_positive_int(
    arg_value: int | None,
    config: dict[str, Any],
    key: str,
    default: int,
) -> int:
    raw = arg_value if arg_value is not None else config.get(key, default)
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise SystemExit(f"{key} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise SystemExit(f"{key} must be >= 1, got {value}")
    return value


def _resolve_positive_float(
    arg_value: float | None,
    config: dict[str, Any],
    key: str,
    default: float,
) -> float:
    raw = arg_value if arg_value is not None else config.get(key, default)
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise SystemExit(f"{key} must be a number, got {raw!r}") from exc
    if value <= 0.0:
        raise SystemExit(f"{key} must be > 0, got {value}")
    return value


def _resolve_seed(arg_value: int | None, config: dict[str, Any]) -> int | None:
    raw = arg_value if arg_value is not None else config.get("seed")
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise SystemExit(f"seed must be an integer, got {raw!r}") from exc


def resolve_config(args: argparse.Namespace) -> dict[str, Any]:
    file_config = load_config(args.config) if getattr(args, "config", None) else {}
    return merge_dicts(default_bench_config(), file_config)


def resolve_bench_settings(
    args: argparse.Namespace,
    config: dict[str, Any],
) -> BenchSettings:
    timeout_s = _resolve_positive_float(
        getattr(args, "timeout", None), config, "timeout_s", DEFAULT_TIMEOUT_S
    )
    num_games = _resolve_positive_int(
        getattr(args, "num_games", None), config, "num_games", DEFAULT_NUM_GAMES
    )

    strategy_name = str(
        getattr(args, "strategy", None) or config.get("strategy") or DEFAULT_STRATEGY
    )
    strategy_options = config.get("strategy_options") or {}
    if not isinstance(strategy_options, dict):
        raise SystemExit("strategy_options must be an object.")
    strategy_options = dict(strategy_options)
    depth = getattr(args, "depth", None)
    if depth is not None:
        if strategy_name != "expectimax":
            raise SystemExit("--depth only applies to --strategy expectimax.")
        strategy_options["depth"] = depth
    try:
        strategy = build_strategy(strategy_name, strategy_options)
    except KeyError as exc:
        raise SystemExit(
            f"Unknown strategy '{strategy_name}'. Available: {', '.join(list_strategies())}"
        ) from exc
    except (TypeError, ValueError) as exc:
        raise SystemExit(
            f"Invalid options for strategy '{strategy_name}': {exc}"
        ) from exc

    parallelism_arg = getattr(args, "parallelism", None)
    if parallelism_arg is None and config.get("parallelism") is None:
        parallelism = default_parallelism()
    else:
        parallelism = _resolve_positive_int(parallelism_arg, config, "parallelism", 1)

    return BenchSettings(
        timeout_s=timeout_s,
        num_games=num_games,
        strategy=strategy,
        strategy_name=strategy_name,
        strategy_options=strategy_options,
        seed=_resolve_seed(getattr(args, "seed", None), config),
        parallelism=parallelism,
    )


def resolve_progress_settings(
    args: argparse.Namespace,
    config: dict[str, Any],
) -> tuple[bool, float, bool]:
    progress_arg = getattr(args, "progress", None)
    progress_refresh_arg = getattr(args, "progress_refresh_s", None)

    if progress_arg is not None:
        enabled = bool(progress_arg)
        explicit_request = True
    elif "progress" in config:
        enabled = bool(config.get("progress"))
        explicit_request = True
    else:
        enabled = bool(sys.stderr.isatty())
        explicit_request = False

    refresh_value = (
        progress_refresh_arg
        if progress_refresh_arg is not None
        else config.get("progress_refresh_s", 0.25)
    )
    try:
        refresh_s = float(refresh_value)
    except (TypeError, ValueError) as exc:
        raise SystemExit("progress_refresh_s must be a positive number.") from exc
    if refresh_s <= 0:
        raise SystemExit("progress_refresh_s must be > 0.")
    return enabled, refresh_s, explicit_request
