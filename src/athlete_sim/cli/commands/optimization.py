"""Optimization command: grid search for the best regimen."""

import json
from typing import Annotated

import typer

from ...core.config import DEFAULT_DURATION_MONTHS
from ...core.engine.config_loader import load_optimizer_settings
from ...core.metrics import compare_final_stats
from ...core.models import InitialPhysiology, SimulationInput, TrainingRegimen
from ...core.optimizer import OptimizationFailure, find_optimal_plan, score_final_stats
from ...core.simulator import simulate as run_simulation
from ...io.serializers import (
    ValidationError,
    build_report_payload,
    optimization_result_to_dict,
    validate_regimen,
)
from .. import views
from ..app import (
    AgeOption,
    BodyFatOption,
    BodyWeightOption,
    DietOption,
    EnduranceOption,
    HoursOption,
    IntensityOption,
    JsonOption,
    MobilityOption,
    MonthsOption,
    MuscleMassOption,
    SleepOption,
    StrengthOption,
    app,
    checked_physiology,
    warn_unusual_horizon,
)
from .simulation import PlotOption, check_plot_metric


@app.command()
def optimize(
    age: AgeOption = 25,
    body_weight: BodyWeightOption = 75,
    muscle_mass: MuscleMassOption = 40,
    body_fat: BodyFatOption = 15,
    strength: StrengthOption = 100,
    endurance: EnduranceOption = 100,
    mobility: MobilityOption = 70,
    months: MonthsOption = DEFAULT_DURATION_MONTHS,
    compare: Annotated[
        bool,
        typer.Option(
            "--compare", "-c",
            help="Also simulate the regimen given by --hours/--intensity/--diet/--sleep and compare",
        ),
    ] = False,
    hours: HoursOption = 2,
    intensity: IntensityOption = 50,
    diet: DietOption = 75,
    sleep: SleepOption = 8,
    json_out: JsonOption = False,
    plot: PlotOption = None,
) -> None:
    """
    Search the regimen grid for the plan with the best projected outcome.

    The grid and score weights come from model.yaml
    (override in ~/.athlete-sim/model.yaml).
    """
    check_plot_metric(plot)
    physiology = checked_physiology(
        InitialPhysiology(age, body_weight, muscle_mass, body_fat, strength, endurance, mobility),
        months,
    )

    your_regimen: TrainingRegimen | None = None
    if compare:
        try:
            your_regimen = validate_regimen(TrainingRegimen(hours, intensity, diet, sleep))
        except ValidationError as e:
            for message in e.errors.values():
                views.print_error(message)
            raise typer.Exit(1)

    try:
        grid, weights = load_optimizer_settings()
    except ValueError as e:
        views.print_error(f"Invalid optimizer config: {e}")
        raise typer.Exit(1)

    try:
        result = find_optimal_plan(physiology, months, grid=grid, weights=weights)
    except OptimizationFailure as e:
        views.print_error(str(e))
        views.print_info("Check the optimizer.grid section of your model.yaml.")
        raise typer.Exit(1)

    your_trajectory = None
    if your_regimen is not None:
        your_trajectory = run_simulation(SimulationInput(physiology, your_regimen), months)

    if json_out:
        out = optimization_result_to_dict(result)
        out["report"] = build_report_payload(physiology, result.regimen, months, result.trajectory)
        if your_regimen is not None and your_trajectory is not None:
            out["comparison"] = {
                "your_score": round(score_final_stats(physiology, your_trajectory[-1], weights), 4),
                "metrics": [
                    {
                        "metric": c.metric,
                        "yours": c.yours,
                        "optimal": c.optimal,
                        "difference": round(c.difference, 2),
                        "is_improvement": c.is_improvement,
                    }
                    for c in compare_final_stats(your_trajectory, result.trajectory)
                ],
            }
        print(json.dumps(out, indent=2))
        return

    warn_unusual_horizon(months)
    views.print_optimization(physiology, result)

    if your_regimen is not None and your_trajectory is not None:
        your_score = score_final_stats(physiology, your_trajectory[-1], weights)
        views.console.print()
        views.console.print(
            f"[bold]Your plan:[/bold] {views.format_regimen(your_regimen)} (score {your_score:.3f})"
        )
        views.console.print(
            views.format_comparison_table(compare_final_stats(your_trajectory, result.trajectory))
        )

    if plot:
        if your_trajectory is not None:
            views.print_plot(your_trajectory, plot, comparison=result.trajectory)
        else:
            views.print_plot(result.trajectory, plot)
