"""Simulation commands: simulate and reference."""

import json
from dataclasses import asdict
from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_DURATION_MONTHS, INPUT_RANGES
from ...core.metrics import get_metric_info
from ...core.models import InitialPhysiology, TrainingRegimen
from ...core.reference import reference_ranges
from ...core.simulator import simulate as run_simulation
from ...io.serializers import build_report_payload, trajectory_to_list
from .. import views
from ..app import (
    AgeOption,
    BodyFatOption,
    BodyWeightOption,
    DietOption,
    EnduranceOption,
    HoursOption,
    InputOption,
    IntensityOption,
    JsonOption,
    MobilityOption,
    MonthsOption,
    MuscleMassOption,
    SleepOption,
    StrengthOption,
    app,
    resolve_simulation_input,
    warn_unusual_horizon,
)

PlotOption = Annotated[
    Optional[str],
    typer.Option(
        "--plot", "-P",
        help="Chart one metric: muscle_mass, vo2_max, body_fat, strength_index, endurance_index",
    ),
]


def check_plot_metric(metric: str | None) -> None:
    """Exit with an error if the --plot metric is unknown."""
    if metric is None:
        return
    try:
        get_metric_info(metric)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


@app.command()
def simulate(
    age: AgeOption = 25,
    body_weight: BodyWeightOption = 75,
    muscle_mass: MuscleMassOption = 40,
    body_fat: BodyFatOption = 15,
    strength: StrengthOption = 100,
    endurance: EnduranceOption = 100,
    mobility: MobilityOption = 70,
    hours: HoursOption = 2,
    intensity: IntensityOption = 50,
    diet: DietOption = 75,
    sleep: SleepOption = 8,
    months: MonthsOption = DEFAULT_DURATION_MONTHS,
    input_path: InputOption = None,
    json_out: JsonOption = False,
    plot: PlotOption = None,
    factors: Annotated[
        bool,
        typer.Option("--factors", help="Also show stimulus, recovery and age factors"),
    ] = False,
) -> None:
    """
    Project physiology month by month for one training regimen.
    """
    check_plot_metric(plot)
    simulation_input = resolve_simulation_input(
        input_path,
        InitialPhysiology(age, body_weight, muscle_mass, body_fat, strength, endurance, mobility),
        TrainingRegimen(hours, intensity, diet, sleep),
        months,
    )

    trajectory = run_simulation(simulation_input, months)

    if json_out:
        print(json.dumps({
            "trajectory": trajectory_to_list(trajectory),
            "report": build_report_payload(
                simulation_input.physiology,
                simulation_input.regimen,
                months,
                trajectory,
            ),
        }, indent=2))
        return

    warn_unusual_horizon(months)
    views.print_simulation(
        simulation_input.physiology,
        simulation_input.regimen,
        trajectory,
        show_factors=factors,
    )
    if plot:
        views.print_plot(trajectory, plot)


@app.command()
def reference(
    age: Annotated[float, typer.Argument(help="Age in years (11-50)")] = 25,
    json_out: JsonOption = False,
) -> None:
    """
    Show typical physiology values for an athlete of the given age.
    """
    low, high, message = INPUT_RANGES["age"]
    if not low <= age <= high:
        views.print_error(message)
        raise typer.Exit(1)

    ranges = reference_ranges(age)

    if json_out:
        print(json.dumps(asdict(ranges), indent=2))
        return

    views.console.print(views.format_reference_table(ranges))
