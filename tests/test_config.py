from __future__ import annotations

import argparse
import json
import os
import tempfile
import unittest
from unittest import mock

from twenty48_bench.agents import ExpectimaxStrategy, GreedyStrategy, UniformRandomStrategy
from twenty48_bench.bench.common import (
    resolve_bench_settings,
    resolve_config,
    resolve_progress_settings,
)
from twenty48_bench.config import default_bench_config, load_config, merge_dicts


def _args(**overrides: object) -> argparse.Namespace:
    values: dict[str, object] = {
        "timeout": None,
        "num_games": None,
        "strategy": None,
        "depth": None,
        "seed": None,
        "parallelism": None,
        "config": None,
        "progress": None,
        "progress_refresh_s": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestConfig(unittest.TestCase):
    def test_load_config_expands_env_vars(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            with mock.patch.dict(os.environ, {"T48_STRATEGY": "greedy"}):
                with open(path, "w", encoding="utf-8") as f:
                    json.dump({"strategy": "$T48_STRATEGY"}, f)
                loaded = load_config(path)
            self.assertEqual(loaded["strategy"], "greedy")

    def test_load_config_rejects_bad_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = os.path.join(tmp, "missing.json")
            with self.assertRaises(SystemExit):
                load_config(missing)
            broken = os.path.join(tmp, "broken.json")
            with open(broken, "w", encoding="utf-8") as f:
                f.write("{not json")
            with self.assertRaises(SystemExit):
                load_config(broken)
            listing = os.path.join(tmp, "list.json")
            with open(listing, "w", encoding="utf-8") as f:
                json.dump([1, 2], f)
            with self.assertRaises(SystemExit):
                load_config(listing)

    def test_merge_dicts_nested(self) -> None:
        base = {"a": 1, "nested": {"x": 1, "y": 2}}
        override = {"nested": {"y": 3, "z": 4}}
        merged = merge_dicts(base, override)
        self.assertEqual(merged, {"a": 1, "nested": {"x": 1, "y": 3, "z": 4}})


class TestResolveBenchSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch(
            "twenty48_bench.bench.common.default_parallelism", return_value=4
        ):
            settings = resolve_bench_settings(_args(), default_bench_config())
        self.assertEqual(settings.timeout_s, 600.0)
        self.assertEqual(settings.num_games, 8)
        self.assertIsInstance(settings.strategy, UniformRandomStrategy)
        self.assertIsNone(settings.seed)
        self.assertEqual(settings.parallelism, 4)

    def test_cli_overrides_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "bench.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump(
                    {
                        "num_games": 3,
                        "timeout_s": 5,
                        "strategy": "expectimax",
                        "strategy_options": {"depth": 3},
                        "seed": 11,
                        "parallelism": 2,
                    },
                    f,
                )
            args = _args(config=path, num_games=5, depth=1)
            settings = resolve_bench_settings(args, resolve_config(args))
        self.assertEqual(settings.num_games, 5)
        self.assertEqual(settings.timeout_s, 5.0)
        self.assertEqual(settings.seed, 11)
        self.assertEqual(settings.parallelism, 2)
        self.assertIsInstance(settings.strategy, ExpectimaxStrategy)
        assert isinstance(settings.strategy, ExpectimaxStrategy)
        self.assertEqual(settings.strategy.depth, 1)

    def test_strategy_from_cli(self) -> None:
        settings = resolve_bench_settings(
            _args(strategy="greedy", parallelism=1), default_bench_config()
        )
        self.assertIsInstance(settings.strategy, GreedyStrategy)

    def test_invalid_values_exit(self) -> None:
        config = default_bench_config()
        bad_inputs = [
            _args(num_games=0, parallelism=1),
            _args(timeout=0, parallelism=1),
            _args(timeout=-3, parallelism=1),
            _args(parallelism=0),
            _args(depth=2, parallelism=1),
            _args(strategy="expectimax", depth=0, parallelism=1),
        ]
        for args in bad_inputs:
            with self.subTest(args=args):
                with self.assertRaises(SystemExit):
                    resolve_bench_settings(args, config)

    def test_invalid_config_entries_exit(self) -> None:
        for override in (
            {"strategy": "minimax"},
            {"strategy_options": [1]},
            {"strategy_options": {"width": 2}},
            {"num_games": "many"},
            {"seed": "abc"},
        ):
            with self.subTest(override=override):
                config = merge_dicts(default_bench_config(), override)
                with self.assertRaises(SystemExit):
                    resolve_bench_settings(_args(parallelism=1), config)


class TestResolveProgressSettings(unittest.TestCase):
    def test_explicit_flag_wins(self) -> None:
        enabled, refresh_s, explicit = resolve_progress_settings(
            _args(progress=True, progress_refresh_s=1.5), {"progress": False}
        )
        self.assertTrue(enabled)
        self.assertEqual(refresh_s, 1.5)
        self.assertTrue(explicit)

    def test_defaults_follow_tty(self) -> None:
        with mock.patch("twenty48_bench.bench.common.sys.stderr") as stderr:
            stderr.isatty.return_value = False
            enabled, refresh_s, explicit = resolve_progress_settings(_args(), {})
        self.assertFalse(enabled)
        self.assertEqual(refresh_s, 0.25)
        self.assertFalse(explicit)

    def test_invalid_refresh_exits(self) -> None:
        with self.assertRaises(SystemExit):
            resolve_progress_settings(_args(progress_refresh_s=0), {})


if __name__ == "__main__":
    unittest.main()
