from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

from .layout import FORCE_ITERATIONS, LAYOUT_KINDS

DEFAULT_CONFIG: dict[str, Any] = {
    "n_disks": 3,
    "max_disks": 6,
    "depth_bound": None,
    "layout": "hierarchical",
    "width": 1200,
    "height": 800,
    "seed": None,
    "force": {"iterations": FORCE_ITERATIONS},
    "out_dir": "artifacts/hanoi_tree",
}


def load_config(path: str) -> dict[str, Any]:
    """Read a JSON explorer config; `$VAR`/`${VAR}` in string values are expanded."""

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config must be a JSON object, got {type(data).__name__}")
    return _expand_env_vars(data)


def _expand_env_vars(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return list(map(_expand_env_vars, value))
    return os.path.expandvars(value) if isinstance(value, str) else value


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay `override` onto `base`; sections present in both merge key by key."""

    merged = dict(base)
    for key, value in override.items():
        section = merged.get(key)
        if isinstance(section, dict) and isinstance(value, dict):
            value = merge_dicts(section, value)
        merged[key] = value
    return merged


def _as_int(
    section: dict[str, Any], key: str, *, minimum: int, label: str | None = None
) -> None:
    name = label or key
    value = section.get(key)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    section[key] = value


def resolve_config(
    path: str | None = None, overrides: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Defaults, then the JSON file at `path`, then non-None `overrides`."""

    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        config = merge_dicts(config, load_config(path))
    if overrides:
        config = merge_dicts(
            config, {k: v for k, v in overrides.items() if v is not None}
        )

    _as_int(config, "n_disks", minimum=1)
    _as_int(config, "max_disks", minimum=1)
    _as_int(config, "width", minimum=1)
    _as_int(config, "height", minimum=1)
    if config["n_disks"] > config["max_disks"]:
        raise ValueError(
            f"n_disks must be <= max_disks ({config['max_disks']}), got {config['n_disks']}"
        )
    if config.get("depth_bound") is not None:
        _as_int(config, "depth_bound", minimum=-1)
    if config.get("seed") is not None:
        _as_int(config, "seed", minimum=0)
    if config["layout"] not in LAYOUT_KINDS:
        raise ValueError(f"layout must be one of {LAYOUT_KINDS}, got {config['layout']!r}")
    if not isinstance(config["force"], dict):
        raise ValueError(f"force must be an object, got {config['force']!r}")
    _as_int(config["force"], "iterations", minimum=0, label="force.iterations")
    return config
