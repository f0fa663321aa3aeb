"""Shared Typer app object, shared option types, and input helpers."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.config import DURATION_CHOICES
from ..core.models import InitialPhysiology, SimulationInput, TrainingRegimen
from ..io.serializers import (
    ValidationError,
    load_simulation_input,
    validate_duration,
    validate_physiology,
    validate_simulation_input,
)
from . import views

# Physiology options (defaults match a typical 25-year-old recreational athlete)
AgeOption = Annotated[float, typer.Option("--age", help="Age in years (11-50)")]
BodyWeightOption = Annotated[
    float, typer.Option("--body-weight", "-w", help="Body weight in kg (30-120)")
]
MuscleMassOption = Annotated[
    float, typer.Option("--muscle-mass", help="Muscle mass, % of body weight (25-55)")
]
BodyFatOption = Annotated[float, typer.Option("--body-fat", help="Body fat % (5-35)")]
StrengthOption = Annotated[float, typer.Option("--strength", help="Strength index (30-200)")]
EnduranceOption = Annotated[float, typer.Option("--endurance", help="Endurance index (30-200)")]
MobilityOption = Annotated[float, typer.Option("--mobility", help="Mobility score (30-100)")]

# Regimen options
HoursOption = Annotated[
    float, typer.Option("--hours", help="Training hours per day (0.5-6)")
]
IntensityOption = Annotated[float, typer.Option("--intensity", help="Training intensity % (0-100)")]
DietOption = Annotated[float, typer.Option("--diet", help="Diet quality % (0-100)")]
SleepOption = Annotated[float, typer.Option("--sleep", help="Sleep hours per night (4-10)")]

MonthsOption = Annotated[
    int,
    typer.Option("--months", "-m", help="Simulation horizon in months (usually 6, 12, 24 or 36)"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]
InputOption = Annotated[
    Optional[Path],
    typer.Option(
        "--input", "-i",
        help="JSON file with 'physiology' and 'regimen' objects (overrides the options)",
    ),
]

app = typer.Typer(
    name="athlete-sim",
    help="Project an athlete's physiology month by month and search for the best training plan.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log simulator and optimizer details"),
    ] = False,
) -> None:
    """
    Athlete physiology simulator and training-plan optimizer.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


def checked_physiology(physiology: InitialPhysiology, months: int) -> InitialPhysiology:
    """Validate physiology and horizon, exiting on failure."""
    try:
        validate_duration(months)
        return validate_physiology(physiology)
    except ValidationError as e:
        _print_validation_error(e)
        raise typer.Exit(1)


def resolve_simulation_input(
    input_path: Path | None,
    physiology: InitialPhysiology,
    regimen: TrainingRegimen,
    months: int,
) -> SimulationInput:
    """
    Build and validate the SimulationInput for a command.

    A JSON input file, when given, replaces the option values.
    """
    try:
        validate_duration(months)
        if input_path is not None:
            simulation_input = load_simulation_input(input_path)
        else:
            simulation_input = SimulationInput(physiology, regimen)
        return validate_simulation_input(simulation_input)
    except FileNotFoundError:
        views.print_error(f"Input file not found: {input_path}")
        raise typer.Exit(1)
    except ValidationError as e:
        _print_validation_error(e)
        raise typer.Exit(1)


def _print_validation_error(error: ValidationError) -> None:
    if error.errors:
        for message in error.errors.values():
            views.print_error(message)
    else:
        views.print_error(str(error))


def warn_unusual_horizon(months: int) -> None:
    """Warn when the horizon is not one of the usual plan lengths."""
    if months not in DURATION_CHOICES:
        choices = ", ".join(str(m) for m in DURATION_CHOICES)
        views.print_warning(f"{months}-month horizon; usual plan lengths are {choices} months.")
