"""
Grid-search plan optimizer.

Runs the simulator for every regimen in a RegimenGrid, scores each final
snapshot against the starting physiology, and keeps the best. Candidates
are evaluated in enumeration order and only a strictly better score
replaces the current best, so ties go to the earliest regimen.
"""

import itertools
import logging
from collections.abc import Callable, Iterator

from .config import BODY_FAT_FLOOR_PERCENT, DEFAULT_GRID, DEFAULT_SCORE_WEIGHTS
from .models import (
    InitialPhysiology,
    OptimizationResult,
    RegimenGrid,
    ScoreWeights,
    SimulationDataPoint,
    SimulationInput,
    TrainingRegimen,
    Trajectory,
)
from .physiology import initial_muscle_mass, initial_vo2_max
from .simulator import simulate

logger = logging.getLogger(__name__)

SimulateFn = Callable[[SimulationInput, int], Trajectory]


class OptimizationFailure(RuntimeError):
    """Raised when the grid produced no candidate regimen."""


def cartesian_product(dimensions: dict[str, tuple[float, ...]]) -> Iterator[dict[str, float]]:
    """
    Yield every combination of the named option sets.

    The last dimension varies fastest, matching nested loops written in
    dict order.

    Args:
        dimensions: name → options

    Yields:
        One {name: value} dict per combination
    """
    names = list(dimensions)
    for values in itertools.product(*(dimensions[n] for n in names)):
        yield dict(zip(names, values))


def iter_regimens(grid: RegimenGrid) -> Iterator[TrainingRegimen]:
    """Yield every TrainingRegimen in the grid, in enumeration order."""
    for combo in cartesian_product(grid.dimensions()):
        yield TrainingRegimen(**combo)


def score_final_stats(
    physiology: InitialPhysiology,
    final: SimulationDataPoint,
    weights: ScoreWeights = DEFAULT_SCORE_WEIGHTS,
) -> float:
    """
    Score a final snapshot against the starting physiology.

    score = 2.0 × M_f/M_0 + 1.5 × V_f/V_0 + 1.0 × F_0/F_f
          + 1.0 × S_f/S_0 + 1.0 × E_f/E_0

    Body fat is inverted so that losing fat raises the score. F_f is
    clamped to the simulator's 3 % floor.

    Args:
        physiology: Starting physiology
        final: Last snapshot of a trajectory
        weights: Weight per ratio

    Returns:
        Scalar score (higher is better)
    """
    final_body_fat = max(final.body_fat, BODY_FAT_FLOOR_PERCENT)
    return (
        weights.muscle_mass * (final.muscle_mass / initial_muscle_mass(physiology))
        + weights.vo2_max * (final.vo2_max / initial_vo2_max(physiology))
        + weights.body_fat * (physiology.body_fat / final_body_fat)
        + weights.strength * (final.strength_index / physiology.strength_index)
        + weights.endurance * (final.endurance_index / physiology.endurance_index)
    )


def score_regimen(
    physiology: InitialPhysiology,
    regimen: TrainingRegimen,
    duration_months: int,
    weights: ScoreWeights = DEFAULT_SCORE_WEIGHTS,
    simulate_fn: SimulateFn = simulate,
) -> float:
    """Simulate one regimen and score its final snapshot."""
    trajectory = simulate_fn(SimulationInput(physiology, regimen), duration_months)
    return score_final_stats(physiology, trajectory[-1], weights)


def find_optimal_plan(
    physiology: InitialPhysiology,
    duration_months: int,
    grid: RegimenGrid = DEFAULT_GRID,
    weights: ScoreWeights = DEFAULT_SCORE_WEIGHTS,
    simulate_fn: SimulateFn = simulate,
) -> OptimizationResult:
    """
    Exhaustively search the regimen grid for the best-scoring plan.

    Args:
        physiology: Starting physiology
        duration_months: Horizon passed to every simulation
        grid: Option sets to search (81 combinations by default)
        weights: Score weights
        simulate_fn: Simulator to call per candidate

    Returns:
        OptimizationResult with the winning regimen and its trajectory

    Raises:
        OptimizationFailure: If the grid yields no candidate
    """
    best_regimen: TrainingRegimen | None = None
    best_trajectory: Trajectory | None = None
    best_score = float("-inf")
    evaluated = 0

    for regimen in iter_regimens(grid):
        trajectory = simulate_fn(SimulationInput(physiology, regimen), duration_months)
        score = score_final_stats(physiology, trajectory[-1], weights)
        evaluated += 1
        logger.debug("Candidate %s scored %.4f", regimen, score)

        if score > best_score:
            best_score = score
            best_regimen = regimen
            best_trajectory = trajectory

    if best_regimen is None or best_trajectory is None:
        raise OptimizationFailure("Optimization failed to find a valid training plan.")

    logger.info(
        "Best of %d regimens over %d months: %s (score %.4f)",
        evaluated,
        duration_months,
        best_regimen,
        best_score,
    )
    return OptimizationResult(
        regimen=best_regimen,
        trajectory=best_trajectory,
        score=best_score,
        candidates_evaluated=evaluated,
    )
