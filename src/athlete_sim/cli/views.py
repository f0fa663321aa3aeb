"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of simulation and optimizer results.
"""

from rich.console import Console
from rich.table import Table

from ..core.ascii_plot import create_trajectory_plot
from ..core.metrics import METRICS, metric_changes
from ..core.models import (
    InitialPhysiology,
    MetricComparison,
    OptimizationResult,
    ReferenceRanges,
    TrainingRegimen,
    Trajectory,
)

console = Console()


def format_trajectory_table(trajectory: Trajectory, title: str = "Projected Trajectory") -> Table:
    """
    Create a Rich table with one row per simulated month.

    Args:
        trajectory: Simulation output
        title: Table title

    Returns:
        Rich Table object
    """
    table = Table(title=title)

    table.add_column("Month", justify="right", style="dim")
    table.add_column("Muscle(kg)", justify="right", style="bold")
    table.add_column("VO2max", justify="right")
    table.add_column("Fat(%)", justify="right")
    table.add_column("Strength", justify="right", style="cyan")
    table.add_column("Endurance", justify="right", style="green")

    for p in trajectory:
        table.add_row(
            str(p.month),
            f"{p.muscle_mass:.2f}",
            f"{p.vo2_max:.2f}",
            f"{p.body_fat:.2f}",
            f"{p.strength_index:.2f}",
            f"{p.endurance_index:.2f}",
        )

    return table


def format_factors_table(trajectory: Trajectory) -> Table:
    """Create a Rich table of the monthly diagnostic factors."""
    table = Table(title="Model Factors")

    table.add_column("Month", justify="right", style="dim")
    table.add_column("Stimulus", justify="right", style="cyan")
    table.add_column("Recovery", justify="right", style="green")
    table.add_column("Age", justify="right", style="yellow")

    for p in trajectory:
        table.add_row(
            str(p.month),
            f"{p.training_stimulus:.3f}",
            f"{p.recovery_factor:.3f}",
            f"{p.age_factor:.3f}",
        )

    return table


def format_regimen(regimen: TrainingRegimen) -> str:
    """Format a regimen as a single line."""
    return (
        f"{regimen.training_hours:g} h/day @ {regimen.intensity:g}% intensity, "
        f"diet {regimen.diet:g}%, sleep {regimen.sleep_hours:g} h"
    )


def format_summary(physiology: InitialPhysiology, trajectory: Trajectory) -> str:
    """
    Format start → end values and change for every metric.

    Returns:
        Formatted string
    """
    first = trajectory[0]
    last = trajectory[-1]
    changes = metric_changes(trajectory)

    lines = [f"After {last.month} months (age {physiology.age:g} → {physiology.age + last.month / 12:.1f})"]
    for metric, info in METRICS.items():
        lines.append(
            f"- {info.label}: {getattr(first, metric):.2f} → {getattr(last, metric):.2f} {info.unit}"
            f"  ({changes[metric]:+.2f})"
        )
    return "\n".join(lines)


def format_comparison_table(comparisons: list[MetricComparison]) -> Table:
    """Create a Rich table comparing final values of your plan and the optimal plan."""
    table = Table(title="Your Plan vs Optimal Plan")

    table.add_column("Metric")
    table.add_column("Yours", justify="right")
    table.add_column("Optimal", justify="right", style="bold")
    table.add_column("Diff", justify="right")

    for c in comparisons:
        style = "green" if c.is_improvement else "dim"
        table.add_row(
            f"{c.label} ({c.unit})",
            f"{c.yours:.2f}",
            f"{c.optimal:.2f}",
            f"[{style}]{c.difference:+.1f}[/{style}]",
        )

    return table


def format_reference_table(ranges: ReferenceRanges) -> Table:
    """Create a Rich table of typical values for the athlete's age."""
    table = Table(title=f"Reference Ranges (age {ranges.age:g})")

    table.add_column("Input", style="cyan")
    table.add_column("Typical", justify="left")

    table.add_row("Body weight", ranges.body_weight)
    table.add_row("Muscle mass", ranges.muscle_mass_percentage)
    table.add_row("Body fat", ranges.body_fat)
    table.add_row("Strength index", ranges.strength_index)
    table.add_row("Endurance index", ranges.endurance_index)
    table.add_row("Mobility score", ranges.mobility_score)

    return table


def print_simulation(
    physiology: InitialPhysiology,
    regimen: TrainingRegimen,
    trajectory: Trajectory,
    show_factors: bool = False,
) -> None:
    """
    Print a simulation result to console.

    Args:
        physiology: Starting physiology
        regimen: Simulated regimen
        trajectory: Simulation output
        show_factors: Also print the diagnostic factors table
    """
    console.print(f"[bold]Regimen:[/bold] {format_regimen(regimen)}")
    console.print(format_trajectory_table(trajectory))
    if show_factors:
        console.print(format_factors_table(trajectory))
    console.print(format_summary(physiology, trajectory))


def print_optimization(physiology: InitialPhysiology, result: OptimizationResult) -> None:
    """Print the optimizer's winning plan and its trajectory."""
    console.print(
        f"[bold green]Optimal plan[/bold green] ({result.candidates_evaluated} regimens evaluated, "
        f"score {result.score:.3f})"
    )
    console.print(f"  {format_regimen(result.regimen)}")
    console.print(format_trajectory_table(result.trajectory, title="Optimal Plan Trajectory"))
    console.print(format_summary(physiology, result.trajectory))


def print_plot(
    trajectory: Trajectory,
    metric: str,
    comparison: Trajectory | None = None,
) -> None:
    """Print an ASCII chart of one metric."""
    console.print()
    console.print(create_trajectory_plot(trajectory, metric, comparison=comparison), markup=False)


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
