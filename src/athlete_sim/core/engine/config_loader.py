"""
YAML → typed config loader.

Loads optimizer settings from model.yaml (bundled with the package) and
optionally merges user overrides from ~/.athlete-sim/model.yaml.

Usage:
    from athlete_sim.core.engine.config_loader import load_optimizer_settings
    grid, weights = load_optimizer_settings()

If the bundled YAML cannot be read, lookups fall back to the Python
defaults from config.py.  If the user override file exists but has parse
errors, a warning is issued and the file is ignored.
"""

from __future__ import annotations

import importlib.resources
import os
import warnings
from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_GRID, DEFAULT_SCORE_WEIGHTS
from ..models import RegimenGrid, ScoreWeights

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML mapping.

    Raises:
        OSError: If the file cannot be read
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _options(raw: Any, name: str) -> tuple[float, ...]:
    if not isinstance(raw, list):
        raise ValueError(f"optimizer.grid.{name} must be a list of numbers, got {raw!r}")
    try:
        return tuple(float(v) for v in raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"optimizer.grid.{name} must contain only numbers: {raw!r}") from e


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_bundled_yaml_path() -> Path | None:
    """Return the path to the bundled model.yaml, or None if not found."""
    try:
        ref = importlib.resources.files("athlete_sim").joinpath("model.yaml")
        if ref.is_file():
            with importlib.resources.as_file(ref) as p:
                return p
    except (ModuleNotFoundError, TypeError):
        # Namespace package without a resource reader
        pass
    candidate = Path(__file__).parent.parent.parent / "model.yaml"
    return candidate if candidate.exists() else None


def get_user_yaml_path() -> Path | None:
    """Return ~/.athlete-sim/model.yaml if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".athlete-sim" / "model.yaml"
    return p if p.exists() else None


def load_model_config() -> dict[str, Any]:
    """
    Load and merge model configuration from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/athlete_sim/model.yaml
    2. User override at ~/.athlete-sim/model.yaml

    Returns:
        Merged dict of config sections.  Empty dict if no YAML available.
    """
    config: dict[str, Any] = {}

    bundled = get_bundled_yaml_path()
    if bundled is not None:
        try:
            config = _deep_merge(config, _load_yaml_file(bundled))
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(
                f"athlete-sim: cannot read bundled {bundled} ({exc}); using Python defaults.",
                stacklevel=2,
            )

    user = get_user_yaml_path()
    if user is not None:
        try:
            user_cfg = _load_yaml_file(user)
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(
                f"athlete-sim: ignoring user config {user} ({exc})",
                stacklevel=2,
            )
            user_cfg = {}
        if user_cfg:
            config = _deep_merge(config, user_cfg)

    return config


def grid_from_dict(raw: dict[str, Any]) -> RegimenGrid:
    """
    Build a RegimenGrid from an optimizer.grid mapping.

    Missing dimensions fall back to DEFAULT_GRID.

    Raises:
        ValueError: If a dimension is not a list of numbers
    """
    defaults = DEFAULT_GRID.dimensions()
    dims = {
        name: _options(raw[name], name) if name in raw else default
        for name, default in defaults.items()
    }
    return RegimenGrid(**dims)


def weights_from_dict(raw: dict[str, Any]) -> ScoreWeights:
    """
    Build ScoreWeights from an optimizer.score_weights mapping.

    Missing weights fall back to DEFAULT_SCORE_WEIGHTS.

    Raises:
        ValueError: If a weight is not a number
    """
    values: dict[str, float] = {}
    for name in ("muscle_mass", "vo2_max", "body_fat", "strength", "endurance"):
        value = raw.get(name, getattr(DEFAULT_SCORE_WEIGHTS, name))
        try:
            values[name] = float(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"optimizer.score_weights.{name} must be a number, got {value!r}") from e
    return ScoreWeights(**values)


def load_optimizer_settings(
    config: dict[str, Any] | None = None,
) -> tuple[RegimenGrid, ScoreWeights]:
    """
    Resolve the optimizer grid and score weights.

    Args:
        config: Pre-loaded config dict; loaded from YAML when None

    Returns:
        (RegimenGrid, ScoreWeights)

    Raises:
        ValueError: If the optimizer section is malformed
    """
    if config is None:
        config = load_model_config()
    optimizer = config.get("optimizer", {}) or {}
    return (
        grid_from_dict(optimizer.get("grid", {}) or {}),
        weights_from_dict(optimizer.get("score_weights", {}) or {}),
    )
