from __future__ import annotations

import random
import unittest

from twenty48_bench.games.twenty48 import (
    ALL_DIRECTIONS,
    Direction,
    Grid,
    InvalidDirectionError,
    apply_direction,
    legal_directions,
    parse_direction,
    push_left_row,
)

SAMPLE = Grid.from_rows(
    [
        [1, 2, 1, 0],
        [4, 1, 0, 0],
        [3, 0, 0, 0],
        [0, 0, 0, 0],
    ]
)

TERMINAL = Grid.from_rows(
    [
        [1, 2, 1, 2],
        [2, 1, 2, 1],
        [1, 2, 1, 2],
        [2, 1, 2, 1],
    ]
)


class TestPushLeftRow(unittest.TestCase):
    def test_examples(self) -> None:
        cases = [
            ((0, 0, 0, 0), (0, 0, 0, 0)),
            ((0, 1, 0, 0), (1, 0, 0, 0)),
            ((0, 0, 1, 0), (1, 0, 0, 0)),
            ((0, 0, 0, 1), (1, 0, 0, 0)),
            ((1, 1, 0, 1), (2, 1, 0, 0)),
            ((0, 0, 1, 1), (2, 0, 0, 0)),
            ((0, 1, 0, 1), (2, 0, 0, 0)),
            ((1, 2, 0, 1), (1, 2, 1, 0)),
            ((1, 1, 1, 0), (2, 1, 0, 0)),
            ((2, 2, 0, 0), (3, 0, 0, 0)),
            ((1, 1, 1, 1), (2, 2, 0, 0)),
            ((1, 1, 2, 2), (2, 3, 0, 0)),
            ((2, 1, 1, 0), (2, 2, 0, 0)),
        ]
        for row, expected in cases:
            with self.subTest(row=row):
                self.assertEqual(push_left_row(row), expected)

    def test_never_increases_tile_count(self) -> None:
        rng = random.Random(3)
        for _ in range(500):
            row = tuple(rng.choice([0, 0, 1, 2, 3]) for _ in range(4))
            pushed = push_left_row(row)
            self.assertEqual(len(pushed), 4)
            self.assertLessEqual(
                sum(1 for r in pushed if r), sum(1 for r in row if r), row
            )
            # Merging conserves the total tile value.
            self.assertEqual(
                sum(1 << r for r in pushed if r), sum(1 << r for r in row if r), row
            )


class TestApplyDirection(unittest.TestCase):
    def test_down(self) -> None:
        expected = Grid.from_rows(
            [
                [0, 0, 0, 0],
                [1, 0, 0, 0],
                [4, 2, 0, 0],
                [3, 1, 1, 0],
            ]
        )
        self.assertEqual(apply_direction(SAMPLE, Direction.DOWN), expected)

    def test_right(self) -> None:
        expected = Grid.from_rows(
            [
                [0, 1, 2, 1],
                [0, 0, 4, 1],
                [0, 0, 0, 3],
                [0, 0, 0, 0],
            ]
        )
        self.assertEqual(apply_direction(SAMPLE, Direction.RIGHT), expected)

    def test_up_merges_columns(self) -> None:
        grid = Grid.from_rows(
            [
                [1, 0, 0, 0],
                [1, 0, 0, 0],
                [0, 0, 0, 2],
                [1, 0, 0, 2],
            ]
        )
        expected = Grid.from_rows(
            [
                [2, 0, 0, 3],
                [1, 0, 0, 0],
                [0, 0, 0, 0],
                [0, 0, 0, 0],
            ]
        )
        self.assertEqual(apply_direction(grid, Direction.UP), expected)

    def test_no_effect_is_illegal(self) -> None:
        self.assertIsNone(apply_direction(SAMPLE, Direction.LEFT))
        self.assertIsNone(apply_direction(SAMPLE, Direction.UP))
        self.assertEqual(legal_directions(SAMPLE), [Direction.DOWN, Direction.RIGHT])

    def test_terminal_grid_has_no_legal_direction(self) -> None:
        for direction in ALL_DIRECTIONS:
            self.assertIsNone(apply_direction(TERMINAL, direction))
        self.assertEqual(legal_directions(TERMINAL), [])

    def test_full_grid_with_merge_is_not_terminal(self) -> None:
        grid = Grid.from_rows(
            [
                [1, 1, 2, 3],
                [2, 3, 4, 5],
                [3, 4, 5, 6],
                [4, 5, 6, 7],
            ]
        )
        self.assertEqual(legal_directions(grid), [Direction.LEFT, Direction.RIGHT])

    def test_input_is_not_mutated(self) -> None:
        before = SAMPLE.cells
        apply_direction(SAMPLE, Direction.DOWN)
        self.assertEqual(SAMPLE.cells, before)


class TestParseDirection(unittest.TestCase):
    def test_accepts_names_and_indices(self) -> None:
        self.assertIs(parse_direction("Left"), Direction.LEFT)
        self.assertIs(parse_direction(" up "), Direction.UP)
        self.assertIs(parse_direction(1), Direction.DOWN)
        self.assertIs(parse_direction(Direction.RIGHT), Direction.RIGHT)

    def test_rejects_unknown_values(self) -> None:
        for value in ("sideways", 4, True, None):
            with self.subTest(value=value):
                with self.assertRaises(InvalidDirectionError):
                    parse_direction(value)


if __name__ == "__main__":
    unittest.main()
