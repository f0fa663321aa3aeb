"""
Tests for plan comparison, metric helpers, reference ranges and charts.
"""

from dataclasses import replace

import pytest

from athlete_sim.core.ascii_plot import create_trajectory_plot
from athlete_sim.core.metrics import (
    compare_final_stats,
    get_metric_info,
    metric_changes,
    metric_series,
)
from athlete_sim.core.models import InitialPhysiology, SimulationInput, TrainingRegimen
from athlete_sim.core.reference import reference_ranges
from athlete_sim.core.simulator import simulate

PHYSIOLOGY = InitialPhysiology(25, 75, 40, 15, 100, 100, 70)


def _trajectory(months: int = 12, **regimen):
    values = dict(training_hours=2, intensity=50, diet=75, sleep_hours=8)
    values.update(regimen)
    return simulate(SimulationInput(PHYSIOLOGY, TrainingRegimen(**values)), months)


class TestMetrics:
    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            get_metric_info("power")

    def test_metric_series(self):
        series = metric_series(_trajectory(3), "muscle_mass")
        assert [m for m, _ in series] == [0, 1, 2, 3]
        assert series[0][1] == 30.0

    def test_metric_changes_signs(self):
        changes = metric_changes(_trajectory())
        assert changes["muscle_mass"] > 0
        assert changes["body_fat"] < 0
        assert changes["strength_index"] > 0


class TestCompareFinalStats:
    def test_stronger_plan_is_improvement(self):
        yours = _trajectory(training_hours=1.5, intensity=50)
        optimal = _trajectory(training_hours=4.5, intensity=100)
        comparisons = {c.metric: c for c in compare_final_stats(yours, optimal)}

        assert list(comparisons) == [
            "muscle_mass",
            "vo2_max",
            "body_fat",
            "strength_index",
            "endurance_index",
        ]
        assert comparisons["muscle_mass"].is_improvement
        assert comparisons["muscle_mass"].difference > 0
        # Lower body fat is better: negative difference counts as improvement
        assert comparisons["body_fat"].difference < 0
        assert comparisons["body_fat"].is_improvement
        assert not comparisons["body_fat"].higher_is_better

    def test_identical_plans_are_even(self):
        trajectory = _trajectory()
        assert not any(c.is_improvement for c in compare_final_stats(trajectory, trajectory))

    def test_difference_within_tolerance_is_not_improvement(self):
        yours = _trajectory()
        nudged = yours[:-1] + [replace(yours[-1], muscle_mass=yours[-1].muscle_mass + 0.04)]
        muscle = compare_final_stats(yours, nudged)[0]
        assert muscle.difference == pytest.approx(0.04)
        assert not muscle.is_improvement


class TestReferenceRanges:
    def test_peak_adult(self):
        ranges = reference_ranges(25)
        assert ranges.body_weight == "Avg: 65-90kg"
        assert ranges.body_fat == "Athlete: 8-15%"
        assert ranges.strength_index == "Novice: 71, Elite: 134+"
        assert ranges.endurance_index == "Novice: 67, Elite: 123+"
        assert ranges.muscle_mass_percentage == "Athlete: 35-45%"
        assert ranges.mobility_score == "Athlete: 60-85+"

    def test_youngest(self):
        ranges = reference_ranges(11)
        assert ranges.body_weight == "Avg: 35-45kg"
        assert ranges.body_fat == "Athlete: 12-20%"
        assert ranges.strength_index == "Novice: 30, Elite: 60+"
        assert ranges.endurance_index == "Novice: 40, Elite: 70+"

    def test_masters(self):
        ranges = reference_ranges(40)
        assert ranges.body_fat == "Athlete: 11-18%"
        assert ranges.strength_index == "Novice: 68, Elite: 128+"
        assert ranges.endurance_index == "Novice: 72, Elite: 136+"


class TestTrajectoryPlot:
    def test_plot_contains_title_and_points(self):
        chart = create_trajectory_plot(_trajectory(), "strength_index")
        assert chart.startswith("Strength (pts)")
        assert chart.count("●") >= 2
        assert "m12" in chart

    def test_comparison_legend(self):
        chart = create_trajectory_plot(
            _trajectory(), "body_fat", comparison=_trajectory(training_hours=4.5)
        )
        assert "·" in chart
        assert "optimal plan" in chart

    def test_single_point(self):
        chart = create_trajectory_plot(_trajectory(0), "vo2_max")
        assert chart.count("●") == 1

    def test_empty(self):
        assert "No simulation data" in create_trajectory_plot([], "vo2_max")
