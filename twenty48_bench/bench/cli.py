from __future__ import annotations

import sys
from typing import Callable

from twenty48_bench.agents import get_strategy, list_strategies
from twenty48_bench.bench import run


def _list_strategies(argv: list[str]) -> int:
    if argv:
        print(f"strategies takes no arguments, got: {' '.join(argv)}")
        return 2
    for name in list_strategies():
        spec = get_strategy(name)
        options = f" (options: {', '.join(spec.options)})" if spec.options else ""
        print(f"  {name:12s} {spec.description}{options}")
    return 0


COMMANDS: dict[str, tuple[str, Callable[[list[str]], int]]] = {
    "run": ("Play a batch of games and report statistics", run.main),
    "strategies": ("List available strategies", _list_strategies),
}


def _print_help() -> None:
    print("twenty48-bench <command> [args]\n")
    print("Commands:")
    for name, (desc, _) in COMMANDS.items():
        print(f"  {name:20s} {desc}")


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] in {"-h", "--help"}:
        _print_help()
        return 0

    command = args.pop(0)
    if command not in COMMANDS:
        print(f"Unknown command: {command}\n")
        _print_help()
        return 2

    _, handler = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
