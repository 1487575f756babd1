from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from twenty48_bench.bench.game import GameFailure, GameOutcome, GameSuccess
from twenty48_bench.games.twenty48 import format_grid

MIN_REPORTED_RANK = 3
MAX_REPORTED_RANK = 15


@dataclass(frozen=True, slots=True)
class AggregateReport:
    """Summary of a finished batch.

    `reach_rates[rank]` is the percentage of successful games whose final
    board holds a tile of that rank or higher. Failed games are only counted
    in `failures`.
    """

    reach_rates: dict[int, float]
    successes: int
    failures: int
    mean_move_count: float | None
    timeouts: int = 0
    total_evals: int | None = None

    @property
    def games(self) -> int:
        return self.successes + self.failures

    def to_dict(self) -> dict[str, Any]:
        return {
            "games": self.games,
            "successes": self.successes,
            "failures": self.failures,
            "timeouts": self.timeouts,
            "mean_move_count": self.mean_move_count,
            "total_evals": self.total_evals,
            "reach_rates": {
                str(1 << rank): rate for rank, rate in sorted(self.reach_rates.items())
            },
        }


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def _total_evals(outcomes: list[GameOutcome]) -> int | None:
    counted = [o.num_evals for o in outcomes if o.num_evals is not None]
    if not counted:
        return None
    return sum(counted)


def compute_report(
    outcomes: Iterable[GameOutcome],
    *,
    min_rank: int = MIN_REPORTED_RANK,
    max_rank: int = MAX_REPORTED_RANK,
) -> AggregateReport:
    outcomes = list(outcomes)
    successes = [o for o in outcomes if isinstance(o, GameSuccess)]
    failures = [o for o in outcomes if isinstance(o, GameFailure)]

    reach_rates: dict[int, float] = {}
    for rank in range(min_rank, max_rank + 1):
        if not successes:
            reach_rates[rank] = 0.0
            continue
        count = sum(1 for o in successes if o.grid.has_at_least(rank))
        reach_rates[rank] = count / len(successes) * 100.0

    return AggregateReport(
        reach_rates=reach_rates,
        successes=len(successes),
        failures=len(failures),
        mean_move_count=_mean([float(o.move_count) for o in successes]),
        timeouts=sum(1 for o in successes if o.timed_out),
        total_evals=_total_evals(outcomes),
    )


def format_outcome(outcome: GameOutcome) -> str:
    if isinstance(outcome, GameSuccess):
        suffix = " (timeout)" if outcome.timed_out else ""
        return (
            f"[game {outcome.game_id}] score (#actions): {outcome.move_count}{suffix}\n"
            f"{format_grid(outcome.grid)}\n"
        )
    lines = [
        f"[game {outcome.game_id}] error after {outcome.move_count} moves "
        f"(seed={outcome.seed}): {outcome.error}"
    ]
    if outcome.direction is not None:
        lines.append(f"offending action: {outcome.direction}")
    if outcome.grid is not None:
        lines.append(format_grid(outcome.grid))
    return "\n".join(lines) + "\n"


def format_report(report: AggregateReport) -> str:
    lines = ["How many time a tile was reached:"]
    for rank, rate in sorted(report.reach_rates.items()):
        lines.append(f"{1 << rank:>6}: {rate:>6.2f}%")
    lines.append("")
    lines.append(f"Number of successful games: {report.successes}")
    lines.append(f"Number of game with error:  {report.failures}")
    if report.mean_move_count is None:
        lines.append("Average score (#actions):      n/a")
    else:
        lines.append(f"Average score (#actions):   {report.mean_move_count:6.2f}")
    if report.total_evals is not None:
        lines.append(f"Num evals: {report.total_evals}")
    return "\n".join(lines)
