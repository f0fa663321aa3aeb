"""
Tests for the grid-search plan optimizer.
"""

from dataclasses import replace

import pytest

from athlete_sim.core.config import DEFAULT_GRID, DEFAULT_SCORE_WEIGHTS
from athlete_sim.core.models import (
    InitialPhysiology,
    RegimenGrid,
    SimulationDataPoint,
    SimulationInput,
    TrainingRegimen,
)
from athlete_sim.core.optimizer import (
    OptimizationFailure,
    cartesian_product,
    find_optimal_plan,
    iter_regimens,
    score_final_stats,
    score_regimen,
)
from athlete_sim.core.simulator import simulate

PHYSIOLOGY = InitialPhysiology(
    age=25,
    body_weight=75,
    muscle_mass_percentage=40,
    body_fat=15,
    strength_index=100,
    endurance_index=100,
    mobility_score=70,
)
WEAKEST_PLAN = TrainingRegimen(training_hours=1.5, intensity=50, diet=60, sleep_hours=7)


class CountingSimulator:
    """Wraps simulate() and records every regimen it is called with."""

    def __init__(self):
        self.calls: list[TrainingRegimen] = []

    def __call__(self, simulation_input: SimulationInput, duration_months: int):
        self.calls.append(simulation_input.regimen)
        return simulate(simulation_input, duration_months)


def _flat_point(month: int = 0) -> SimulationDataPoint:
    return SimulationDataPoint(
        month=month,
        muscle_mass=30.0,
        vo2_max=45.0,
        body_fat=15.0,
        strength_index=100.0,
        endurance_index=100.0,
        training_stimulus=0.0,
        recovery_factor=1.0,
        age_factor=1.0,
    )


class TestGridEnumeration:
    def test_default_grid_size(self):
        assert DEFAULT_GRID.size == 81
        assert len(list(iter_regimens(DEFAULT_GRID))) == 81

    def test_last_dimension_varies_fastest(self):
        combos = list(cartesian_product({"a": (1, 2), "b": (10, 20, 30)}))
        assert combos[:4] == [
            {"a": 1, "b": 10},
            {"a": 1, "b": 20},
            {"a": 1, "b": 30},
            {"a": 2, "b": 10},
        ]

    def test_regimen_order(self):
        regimens = list(iter_regimens(DEFAULT_GRID))
        assert regimens[0] == WEAKEST_PLAN
        assert regimens[1] == TrainingRegimen(1.5, 50, 60, 8)
        assert regimens[-1] == TrainingRegimen(4.5, 100, 100, 9)

    def test_all_combinations_unique(self):
        regimens = list(iter_regimens(DEFAULT_GRID))
        assert len(set(regimens)) == 81


class TestScoring:
    def test_unchanged_athlete_scores_weight_sum(self):
        """Final == initial → every ratio is 1."""
        score = score_final_stats(PHYSIOLOGY, _flat_point())
        assert score == pytest.approx(2.0 + 1.5 + 1.0 + 1.0 + 1.0)

    def test_lower_body_fat_scores_higher(self):
        lean = replace(_flat_point(), body_fat=10.0)
        assert score_final_stats(PHYSIOLOGY, lean) > score_final_stats(PHYSIOLOGY, _flat_point())
        # 15/10 on the fat term instead of 1
        assert score_final_stats(PHYSIOLOGY, lean) == pytest.approx(6.5 + 0.5)

    def test_final_body_fat_clamped_to_floor(self):
        point = replace(_flat_point(), body_fat=0.0)
        # 15 / 3 = 5 on the fat term
        assert score_final_stats(PHYSIOLOGY, point) == pytest.approx(5.5 + 5.0)

    def test_score_regimen_matches_manual(self):
        trajectory = simulate(SimulationInput(PHYSIOLOGY, WEAKEST_PLAN), 12)
        expected = score_final_stats(PHYSIOLOGY, trajectory[-1], DEFAULT_SCORE_WEIGHTS)
        assert score_regimen(PHYSIOLOGY, WEAKEST_PLAN, 12) == pytest.approx(expected)


class TestFindOptimalPlan:
    def test_evaluates_every_combination(self):
        counter = CountingSimulator()
        result = find_optimal_plan(PHYSIOLOGY, 12, simulate_fn=counter)
        assert len(counter.calls) == 81
        assert len(set(counter.calls)) == 81
        assert result.candidates_evaluated == 81

    def test_optimal_within_grid(self):
        result = find_optimal_plan(PHYSIOLOGY, 12)
        scores = [score_regimen(PHYSIOLOGY, r, 12) for r in iter_regimens(DEFAULT_GRID)]
        assert all(result.score >= s for s in scores)
        assert result.score == pytest.approx(max(scores))

    def test_returns_winner_trajectory(self):
        result = find_optimal_plan(PHYSIOLOGY, 12)
        assert result.trajectory == simulate(SimulationInput(PHYSIOLOGY, result.regimen), 12)
        assert len(result.trajectory) == 13

    def test_regimen_comes_from_grid(self):
        result = find_optimal_plan(PHYSIOLOGY, 12)
        assert result.regimen.training_hours in (1.5, 3, 4.5)
        assert result.regimen.intensity in (50, 75, 100)
        assert result.regimen.diet in (60, 80, 100)
        assert result.regimen.sleep_hours in (7, 8, 9)

    def test_beats_weakest_plan(self):
        result = find_optimal_plan(PHYSIOLOGY, 12)
        assert result.score > score_regimen(PHYSIOLOGY, WEAKEST_PLAN, 12)

    def test_ties_keep_first_candidate(self):
        """Identical scores everywhere → the first regimen enumerated wins."""

        def flat_simulator(simulation_input, duration_months):
            return [_flat_point(m) for m in range(duration_months + 1)]

        result = find_optimal_plan(PHYSIOLOGY, 6, simulate_fn=flat_simulator)
        assert result.regimen == WEAKEST_PLAN

    def test_zero_duration(self):
        """With no months to train every candidate ties; the first one wins."""
        result = find_optimal_plan(PHYSIOLOGY, 0)
        assert result.regimen == WEAKEST_PLAN
        assert len(result.trajectory) == 1

    def test_custom_grid(self):
        grid = RegimenGrid(training_hours=(2.0,), intensity=(60.0, 90.0), diet=(80.0,), sleep_hours=(8.0,))
        counter = CountingSimulator()
        result = find_optimal_plan(PHYSIOLOGY, 12, grid=grid, simulate_fn=counter)
        assert len(counter.calls) == 2
        assert result.regimen.intensity == 90.0

    def test_empty_grid_fails(self):
        grid = RegimenGrid(training_hours=(), intensity=(50.0,), diet=(60.0,), sleep_hours=(7.0,))
        with pytest.raises(OptimizationFailure):
            find_optimal_plan(PHYSIOLOGY, 12, grid=grid)

    @pytest.mark.parametrize("months", [6, 24, 36])
    def test_other_horizons(self, months):
        result = find_optimal_plan(PHYSIOLOGY, months)
        assert len(result.trajectory) == months + 1
        assert result.score > score_regimen(PHYSIOLOGY, WEAKEST_PLAN, months)
