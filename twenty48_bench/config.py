from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

DEFAULT_TIMEOUT_S = 600
DEFAULT_NUM_GAMES = 8


def default_bench_config() -> dict[str, Any]:
    return {
        "timeout_s": DEFAULT_TIMEOUT_S,
        "num_games": DEFAULT_NUM_GAMES,
        "strategy": "random",
        "strategy_options": {},
        "seed": None,
        "parallelism": None,
    }


def load_config(path: str) -> dict[str, Any]:
    try:
        data = json.loads(Path(path).read_text())
    except FileNotFoundError as exc:
        raise SystemExit(f"Config file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SystemExit(f"Config at {path} must be a JSON object.")
    return _expand_env_vars(data)


def _expand_env_vars(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _expand_env_vars(v) for k, v in value.items()}
    return value


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {**base}
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result
