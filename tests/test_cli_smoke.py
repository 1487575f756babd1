from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from twenty48_bench.bench import cli as bench_cli
from twenty48_bench.bench import run as bench_run

try:
    from PIL import Image as PILImage
except ImportError:  # pragma: no cover
    PILImage = None

BASE_ARGS = [
    "--num-games",
    "2",
    "--timeout",
    "30",
    "--seed",
    "7",
    "--parallelism",
    "1",
    "--no-progress",
]


def _capture(fn, argv: list[str]) -> tuple[int, str]:
    stdout = io.StringIO()
    with contextlib.redirect_stdout(stdout):
        code = fn(argv)
    return code, stdout.getvalue()


class TestBenchCliSmoke(unittest.TestCase):
    def test_top_level_help(self) -> None:
        code, out = _capture(bench_cli.main, ["--help"])
        self.assertEqual(code, 0)
        self.assertIn("run", out)
        self.assertIn("strategies", out)

    def test_unknown_command(self) -> None:
        code, out = _capture(bench_cli.main, ["replay"])
        self.assertEqual(code, 2)
        self.assertIn("Unknown command: replay", out)

    def test_strategies_listing(self) -> None:
        code, out = _capture(bench_cli.main, ["strategies"])
        self.assertEqual(code, 0)
        for name in ("random", "greedy", "expectimax"):
            self.assertIn(name, out)
        self.assertIn("options: depth", out)

    def test_run_prints_outcomes_and_report(self) -> None:
        code, out = _capture(bench_cli.main, ["run", *BASE_ARGS])
        self.assertEqual(code, 0)
        self.assertIn("[game 0] score (#actions):", out)
        self.assertIn("[game 1] score (#actions):", out)
        self.assertIn("How many time a tile was reached:", out)
        self.assertIn("Number of successful games: 2", out)
        self.assertIn("Number of game with error:  0", out)

    def test_seeded_runs_are_reproducible(self) -> None:
        _, first = _capture(bench_run.main, BASE_ARGS)
        _, second = _capture(bench_run.main, BASE_ARGS)
        self.assertEqual(first, second)

    def test_json_payload(self) -> None:
        code, out = _capture(
            bench_run.main,
            [*BASE_ARGS, "--strategy", "expectimax", "--depth", "1", "--json"],
        )
        self.assertEqual(code, 0)
        payload = json.loads(out[out.index("{\n") :])
        self.assertEqual(payload["strategy"], {"name": "expectimax", "depth": 1})
        self.assertEqual(payload["num_games"], 2)
        self.assertEqual(payload["seed"], 7)
        self.assertEqual(len(payload["outcomes"]), 2)
        self.assertEqual(payload["report"]["successes"], 2)
        self.assertEqual(payload["report"]["reach_rates"]["8"], 100.0)
        self.assertEqual(
            payload["report"]["total_evals"],
            sum(outcome["num_evals"] for outcome in payload["outcomes"]),
        )
        self.assertGreater(payload["report"]["total_evals"], 0)
        self.assertIn("Num evals:", out)

    def test_parallel_run_matches_serial(self) -> None:
        serial_args = [*BASE_ARGS, "--json"]
        parallel_args = [*serial_args]
        parallel_args[parallel_args.index("--parallelism") + 1] = "2"
        _, serial_out = _capture(bench_run.main, serial_args)
        _, parallel_out = _capture(bench_run.main, parallel_args)
        serial = json.loads(serial_out[serial_out.index("{\n") :])
        parallel = json.loads(parallel_out[parallel_out.index("{\n") :])
        for outcome in (*serial["outcomes"], *parallel["outcomes"]):
            outcome.pop("elapsed_s")
        self.assertEqual(serial["outcomes"], parallel["outcomes"])

    def test_invalid_arguments_exit(self) -> None:
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            with self.assertRaises(SystemExit):
                bench_run.main(["--num-games", "abc"])
            with self.assertRaises(SystemExit):
                bench_run.main(["--strategy", "minimax"])
        with self.assertRaises(SystemExit):
            bench_run.main([*BASE_ARGS, "--depth", "3"])

    @unittest.skipUnless(PILImage is not None, "pillow required for vision rendering")
    def test_render_dir_writes_final_boards(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, out = _capture(bench_run.main, [*BASE_ARGS, "--render-dir", tmp])
            self.assertEqual(code, 0)
            written = sorted(p.name for p in Path(tmp).iterdir())
            self.assertEqual(written, ["game_0000.png", "game_0001.png"])
            self.assertIn("Wrote", out)
            with PILImage.open(Path(tmp) / "game_0000.png") as img:
                self.assertEqual(img.size, (400, 400))


if __name__ == "__main__":
    unittest.main()
