"""
JSON serialization and input validation for simulation data.

Handles conversion between dataclasses and JSON-compatible dicts, range
checks for user input, and the plain-data payload handed to the report
writer.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from ..core.config import INPUT_RANGES
from ..core.metrics import final_point
from ..core.models import (
    InitialPhysiology,
    OptimizationResult,
    SimulationDataPoint,
    SimulationInput,
    TrainingRegimen,
    Trajectory,
)

_PHYSIOLOGY_FIELDS = (
    "age",
    "body_weight",
    "muscle_mass_percentage",
    "body_fat",
    "strength_index",
    "endurance_index",
    "mobility_score",
)
_REGIMEN_FIELDS = ("training_hours", "intensity", "diet", "sleep_hours")


class ValidationError(Exception):
    """
    Raised when data validation fails.

    `errors` maps each offending field to its message.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.errors = errors or {}


# ---------------------------------------------------------------------------
# Range validation
# ---------------------------------------------------------------------------


def _range_errors(values: dict[str, float]) -> dict[str, str]:
    errors: dict[str, str] = {}
    for name, value in values.items():
        low, high, message = INPUT_RANGES[name]
        if value < low or value > high:
            errors[name] = message
    return errors


def _raise_if_errors(errors: dict[str, str]) -> None:
    if errors:
        raise ValidationError(" ".join(errors.values()), errors)


def validate_physiology(physiology: InitialPhysiology) -> InitialPhysiology:
    """
    Check every physiology field against its documented range.

    Args:
        physiology: Physiology to validate

    Returns:
        The physiology if valid

    Raises:
        ValidationError: Listing every out-of-range field
    """
    _raise_if_errors(_range_errors(asdict(physiology)))
    return physiology


def validate_regimen(regimen: TrainingRegimen) -> TrainingRegimen:
    """
    Check every regimen field against its documented range.

    Raises:
        ValidationError: Listing every out-of-range field
    """
    _raise_if_errors(_range_errors(asdict(regimen)))
    return regimen


def validate_simulation_input(simulation_input: SimulationInput) -> SimulationInput:
    """
    Validate physiology and regimen together, reporting all errors at once.

    Raises:
        ValidationError: Listing every out-of-range field
    """
    errors = _range_errors(asdict(simulation_input.physiology))
    errors.update(_range_errors(asdict(simulation_input.regimen)))
    _raise_if_errors(errors)
    return simulation_input


def validate_duration(duration_months: int) -> int:
    """
    Validate simulation horizon.

    Raises:
        ValidationError: If duration is negative
    """
    if duration_months < 0:
        raise ValidationError(f"Duration must be non-negative, got {duration_months}")
    return duration_months


# ---------------------------------------------------------------------------
# Dict conversion
# ---------------------------------------------------------------------------


def _numbers(data: dict[str, Any], fields: tuple[str, ...], kind: str) -> dict[str, float]:
    missing = [f for f in fields if f not in data]
    if missing:
        raise ValidationError(f"{kind} missing fields: {', '.join(missing)}")
    values: dict[str, float] = {}
    for f in fields:
        try:
            values[f] = float(data[f])
        except (TypeError, ValueError) as e:
            raise ValidationError(f"{kind}.{f} must be a number, got {data[f]!r}") from e
    return values


def dict_to_physiology(data: dict[str, Any]) -> InitialPhysiology:
    """
    Convert dictionary to InitialPhysiology.

    Raises:
        ValidationError: If fields are missing or not numeric
    """
    return InitialPhysiology(**_numbers(data, _PHYSIOLOGY_FIELDS, "physiology"))


def dict_to_regimen(data: dict[str, Any]) -> TrainingRegimen:
    """
    Convert dictionary to TrainingRegimen.

    Raises:
        ValidationError: If fields are missing or not numeric
    """
    return TrainingRegimen(**_numbers(data, _REGIMEN_FIELDS, "regimen"))


def dict_to_simulation_input(data: dict[str, Any]) -> SimulationInput:
    """
    Convert {"physiology": {...}, "regimen": {...}} to SimulationInput.

    Raises:
        ValidationError: If either section is missing or malformed
    """
    for section in ("physiology", "regimen"):
        if not isinstance(data.get(section), dict):
            raise ValidationError(f"Input must contain a '{section}' object")
    return SimulationInput(
        physiology=dict_to_physiology(data["physiology"]),
        regimen=dict_to_regimen(data["regimen"]),
    )


def load_simulation_input(path: str | Path) -> SimulationInput:
    """
    Read a SimulationInput from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the file is not valid JSON or is malformed
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"Expected a JSON object in {path}")
    return dict_to_simulation_input(data)


def data_point_to_dict(point: SimulationDataPoint) -> dict[str, Any]:
    """Convert SimulationDataPoint to a JSON-compatible dict."""
    return asdict(point)


def trajectory_to_list(trajectory: Trajectory) -> list[dict[str, Any]]:
    """Convert a trajectory to a list of dicts."""
    return [data_point_to_dict(p) for p in trajectory]


def optimization_result_to_dict(result: OptimizationResult) -> dict[str, Any]:
    """Convert OptimizationResult to a JSON-compatible dict."""
    return {
        "regimen": asdict(result.regimen),
        "score": round(result.score, 4),
        "candidates_evaluated": result.candidates_evaluated,
        "trajectory": trajectory_to_list(result.trajectory),
    }


# ---------------------------------------------------------------------------
# Report payload
# ---------------------------------------------------------------------------


def build_report_payload(
    physiology: InitialPhysiology,
    regimen: TrainingRegimen,
    duration_months: int,
    trajectory: Trajectory,
) -> dict[str, Any]:
    """
    Plain-data input for the natural-language report writer.

    Carries the starting physiology, the regimen, the horizon and the final
    snapshot only; no simulator internals.

    Raises:
        ValueError: If the trajectory is empty
    """
    return {
        "physiology": asdict(physiology),
        "regimen": asdict(regimen),
        "duration_months": duration_months,
        "final_stats": data_point_to_dict(final_point(trajectory)),
    }
