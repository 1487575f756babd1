from __future__ import annotations

import random

from twenty48_bench.agents import ExpectimaxStrategy
from twenty48_bench.games.twenty48 import ALL_DIRECTIONS, Grid, PlayableBoard


def main() -> None:
    board = PlayableBoard(
        Grid.from_values(
            [
                [2, 4, 8, 0],
                [4, 4, 0, 0],
                [2, 0, 0, 2],
                [64, 16, 0, 0],
            ]
        )
    )
    print("Board:\n", board, "\n")

    # Static score of every direction the board accepts.
    for direction in ALL_DIRECTIONS:
        played = board.apply(direction)
        if played is None:
            print(f"{direction}: illegal")
            continue
        outcomes = played.successors()
        print(
            f"{direction}: eval={played.evaluate():.1f} "
            f"chance outcomes={len(outcomes)}"
        )

    search = ExpectimaxStrategy(depth=3)
    choice = search.select(board, rng=random.Random(3))
    print("\nexpectimax(depth=3) picks:", choice, f"({search.last_stats})")


if __name__ == "__main__":
    main()
