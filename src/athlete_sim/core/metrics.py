"""
Trajectory metrics: metric metadata, final stats and plan comparison.
"""

from dataclasses import dataclass

from .config import COMPARISON_TOLERANCE
from .models import MetricComparison, MetricName, SimulationDataPoint, Trajectory


@dataclass(frozen=True)
class MetricInfo:
    """Display metadata for one outcome metric."""

    label: str
    unit: str
    higher_is_better: bool = True


METRICS: dict[MetricName, MetricInfo] = {
    "muscle_mass": MetricInfo("Muscle Mass", "kg"),
    "vo2_max": MetricInfo("VO2 Max", "ml/kg/min"),
    "body_fat": MetricInfo("Body Fat", "%", higher_is_better=False),
    "strength_index": MetricInfo("Strength", "pts"),
    "endurance_index": MetricInfo("Endurance", "pts"),
}


def get_metric_info(metric: str) -> MetricInfo:
    """
    Look up display metadata for a metric name.

    Raises:
        ValueError: If the metric is unknown
    """
    if metric not in METRICS:
        valid = ", ".join(METRICS)
        raise ValueError(f"Unknown metric '{metric}'. Valid metrics: {valid}")
    return METRICS[metric]  # type: ignore[index]


def metric_series(trajectory: Trajectory, metric: str) -> list[tuple[int, float]]:
    """Return (month, value) pairs for one metric."""
    get_metric_info(metric)
    return [(p.month, getattr(p, metric)) for p in trajectory]


def final_point(trajectory: Trajectory) -> SimulationDataPoint:
    """
    Last snapshot of a trajectory.

    Raises:
        ValueError: If the trajectory is empty
    """
    if not trajectory:
        raise ValueError("Trajectory is empty")
    return trajectory[-1]


def metric_changes(trajectory: Trajectory) -> dict[str, float]:
    """Final minus month-0 value for every outcome metric."""
    first = trajectory[0]
    last = final_point(trajectory)
    return {m: round(getattr(last, m) - getattr(first, m), 2) for m in METRICS}


def compare_final_stats(
    yours: Trajectory,
    optimal: Trajectory,
    tolerance: float = COMPARISON_TOLERANCE,
) -> list[MetricComparison]:
    """
    Compare final values of two trajectories metric by metric.

    difference = optimal − yours. The optimal plan counts as an improvement
    when it beats yours by more than `tolerance` in the metric's good
    direction (lower body fat, higher everything else).

    Args:
        yours: Trajectory of the user's regimen
        optimal: Trajectory of the optimized regimen
        tolerance: Minimum difference that counts

    Returns:
        One MetricComparison per metric, in METRICS order
    """
    your_final = final_point(yours)
    optimal_final = final_point(optimal)

    comparisons: list[MetricComparison] = []
    for metric, info in METRICS.items():
        your_value = getattr(your_final, metric)
        optimal_value = getattr(optimal_final, metric)
        difference = optimal_value - your_value
        if info.higher_is_better:
            improved = difference > tolerance
        else:
            improved = difference < -tolerance
        comparisons.append(
            MetricComparison(
                metric=metric,
                label=info.label,
                unit=info.unit,
                yours=your_value,
                optimal=optimal_value,
                difference=difference,
                higher_is_better=info.higher_is_better,
                is_improvement=improved,
            )
        )
    return comparisons
