from __future__ import annotations

from twenty48_bench.agents import build_strategy
from twenty48_bench.bench.common import BenchSettings
from twenty48_bench.bench.run import run_benchmark
from twenty48_bench.bench.scoring import format_report


def main() -> None:
    candidates = [
        ("random", {}),
        ("greedy", {}),
        ("expectimax", {"depth": 2}),
    ]
    for name, options in candidates:
        settings = BenchSettings(
            timeout_s=60.0,
            num_games=4,
            strategy=build_strategy(name, options),
            strategy_name=name,
            strategy_options=options,
            seed=2048,
            parallelism=4,
        )
        _, report = run_benchmark(settings)
        print(f"== {name} {options or ''}")
        print(format_report(report))


if __name__ == "__main__":
    main()
