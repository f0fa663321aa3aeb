"""
ASCII plotting for simulated trajectories.

Creates terminal-friendly charts of one metric over the simulated months.
"""

from .metrics import get_metric_info, metric_series
from .models import Trajectory


def create_trajectory_plot(
    trajectory: Trajectory,
    metric: str,
    width: int = 60,
    height: int = 20,
    comparison: Trajectory | None = None,
    comparison_label: str = "optimal plan",
) -> str:
    """
    Create an ASCII plot of one metric over the simulated months.

    Args:
        trajectory: Trajectory to plot; drawn as ●
        metric: Metric name (muscle_mass, vo2_max, body_fat, ...)
        width: Plot width in characters
        height: Plot height in lines
        comparison: Optional second trajectory; drawn as ·
        comparison_label: Legend label for the comparison trajectory

    Returns:
        ASCII art string
    """
    info = get_metric_info(metric)
    if not trajectory:
        return "No simulation data to plot."

    points = metric_series(trajectory, metric)
    other = metric_series(comparison, metric) if comparison else []

    all_values = [v for _, v in points] + [v for _, v in other]
    y_min = min(all_values)
    y_max = max(all_values)
    y_range = y_max - y_min
    if y_range == 0:
        # Flat line: pad so it sits mid-chart
        y_min -= 1.0
        y_max += 1.0
        y_range = 2.0

    max_month = max(m for m, _ in points + other)
    month_range = max_month if max_month > 0 else 1

    plot_width = width - 9  # Leave room for y-axis labels
    plot_height = height - 4  # Leave room for title, x-axis and legend

    grid = [[" " for _ in range(plot_width)] for _ in range(plot_height)]

    def _grid_pos(month: int, value: float) -> tuple[int, int]:
        x = int((month / month_range) * (plot_width - 1))
        y = int(((value - y_min) / y_range) * (plot_height - 1))
        return x, plot_height - 1 - y  # Flip y-axis

    # Comparison first so the main trajectory wins shared cells
    for month, value in other:
        x, y = _grid_pos(month, value)
        grid[y][x] = "·"

    for month, value in points:
        x, y = _grid_pos(month, value)
        grid[y][x] = "●"

    lines = []
    lines.append(f"{info.label} ({info.unit})")
    lines.append("─" * width)

    for i, row in enumerate(grid):
        y_val = y_max - (i / (plot_height - 1)) * y_range if plot_height > 1 else y_max
        lines.append(f"{y_val:7.2f} ┤" + "".join(row))

    lines.append("─" * width)

    # X-axis month labels
    label_line = [" "] * plot_width
    for month in (0, max_month // 2, max_month):
        x = int((month / month_range) * (plot_width - 1))
        text = f"m{month}"
        x = min(x, plot_width - len(text))
        for j, c in enumerate(text):
            label_line[x + j] = c
    lines.append(" " * 9 + "".join(label_line))

    if comparison:
        lines.append(f"● your plan   · {comparison_label}")

    return "\n".join(lines)
