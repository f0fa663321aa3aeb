"""
Month-by-month physiology simulator.

simulate() derives the static factors once, then advances an AthleteState
one month at a time with step_month(). State keeps full floating-point
precision; rounding happens only in to_data_point().
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from .config import (
    BODY_FAT_FLOOR_FRACTION,
    BODY_FAT_FLOOR_PERCENT,
    FACTOR_DECIMALS,
    METRIC_DECIMALS,
)
from .models import (
    AthleteState,
    MonthlyFactors,
    SimulationDataPoint,
    SimulationInput,
    StaticFactors,
    Trajectory,
)
from .physiology import (
    adaptation_multiplier,
    age_factor,
    base_training_stimulus,
    diet_quality,
    endurance_gain,
    fat_mass_change,
    initial_body_fat_mass,
    initial_muscle_mass,
    initial_vo2_max,
    intensity_factor,
    mobility_factor,
    muscle_gain,
    recovery_factor,
    sleep_quality,
    strength_gain,
    vo2_max_gain,
)

logger = logging.getLogger(__name__)


def derive_static_factors(simulation_input: SimulationInput) -> StaticFactors:
    """
    Compute the factors that stay fixed for the whole run.

    Args:
        simulation_input: Physiology and regimen

    Returns:
        StaticFactors for this run
    """
    physiology = simulation_input.physiology
    regimen = simulation_input.regimen

    sleep_q = sleep_quality(regimen.sleep_hours)
    diet_q = diet_quality(regimen.diet)

    return StaticFactors(
        intensity_factor=intensity_factor(regimen.intensity),
        base_training_stimulus=base_training_stimulus(regimen.training_hours, regimen.intensity),
        sleep_quality=sleep_q,
        diet_quality=diet_q,
        base_recovery_factor=sleep_q * diet_q,
        mobility_factor=mobility_factor(physiology.mobility_score),
        start_age=physiology.age,
        initial_strength=physiology.strength_index,
        initial_endurance=physiology.endurance_index,
    )


def initial_state(simulation_input: SimulationInput) -> AthleteState:
    """Build the month-0 athlete state from the input physiology."""
    physiology = simulation_input.physiology
    return AthleteState(
        body_weight=physiology.body_weight,
        muscle_mass=initial_muscle_mass(physiology),
        body_fat_mass=initial_body_fat_mass(physiology),
        body_fat_percentage=physiology.body_fat,
        vo2_max=initial_vo2_max(physiology),
        strength_index=physiology.strength_index,
        endurance_index=physiology.endurance_index,
    )


def monthly_factors(state: AthleteState, month: int, static: StaticFactors) -> MonthlyFactors:
    """
    Dynamic factors for the given month.

    Age advances by month/12; stimulus shrinks as strength and endurance
    rise above their starting values; recovery improves with consistency.
    """
    current_age = static.start_age + month / 12
    adaptation = adaptation_multiplier(
        state.strength_index,
        state.endurance_index,
        static.initial_strength,
        static.initial_endurance,
    )
    return MonthlyFactors(
        training_stimulus=static.base_training_stimulus * adaptation,
        recovery_factor=recovery_factor(static.base_recovery_factor, month),
        age_factor=age_factor(current_age),
    )


def step_month(state: AthleteState, month: int, static: StaticFactors) -> AthleteState:
    """
    Advance the athlete by one month.

    Pure transition: (state at start of month, month index, static factors)
    → state at start of the next month.

    Args:
        state: State at the start of `month`
        month: Zero-based month index
        static: Factors derived once for the run

    Returns:
        New AthleteState
    """
    factors = monthly_factors(state, month, static)
    stimulus = factors.training_stimulus
    recovery = factors.recovery_factor
    age_f = factors.age_factor
    mobility = static.mobility_factor

    d_muscle = muscle_gain(stimulus, recovery, age_f, mobility)
    d_strength = strength_gain(stimulus, static.intensity_factor, recovery, age_f, mobility)
    d_endurance = endurance_gain(stimulus, recovery, age_f, mobility)
    d_vo2 = vo2_max_gain(stimulus, recovery, age_f)
    d_fat = fat_mass_change(stimulus, static.diet_quality, static.sleep_quality)

    body_weight = state.body_weight + d_muscle + d_fat
    body_fat_mass = state.body_fat_mass + d_fat
    body_fat_percentage = body_fat_mass / body_weight * 100

    # Floors are applied after the percentage is computed
    body_fat_mass = max(body_weight * BODY_FAT_FLOOR_FRACTION, body_fat_mass)
    body_fat_percentage = max(BODY_FAT_FLOOR_PERCENT, body_fat_percentage)

    return AthleteState(
        body_weight=body_weight,
        muscle_mass=state.muscle_mass + d_muscle,
        body_fat_mass=body_fat_mass,
        body_fat_percentage=body_fat_percentage,
        vo2_max=state.vo2_max + d_vo2,
        strength_index=state.strength_index + d_strength,
        endurance_index=state.endurance_index + d_endurance,
    )


def round_half_up(value: float, places: int) -> float:
    """
    Round to `places` decimals with exact halves rounded away from zero.

    Works on the exact binary value of `value`, so 0.5625 -> 0.563 while
    1.005 (stored just below 1.005) -> 1.0. Always returns a float.
    """
    quantum = Decimal(10) ** -places
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def to_data_point(month: int, state: AthleteState, factors: MonthlyFactors) -> SimulationDataPoint:
    """Round a state and its month's factors into an output snapshot."""
    return SimulationDataPoint(
        month=month,
        muscle_mass=round_half_up(state.muscle_mass, METRIC_DECIMALS),
        vo2_max=round_half_up(state.vo2_max, METRIC_DECIMALS),
        body_fat=round_half_up(state.body_fat_percentage, METRIC_DECIMALS),
        strength_index=round_half_up(state.strength_index, METRIC_DECIMALS),
        endurance_index=round_half_up(state.endurance_index, METRIC_DECIMALS),
        training_stimulus=round_half_up(factors.training_stimulus, FACTOR_DECIMALS),
        recovery_factor=round_half_up(factors.recovery_factor, FACTOR_DECIMALS),
        age_factor=round_half_up(factors.age_factor, FACTOR_DECIMALS),
    )


def simulate(simulation_input: SimulationInput, duration_months: int) -> Trajectory:
    """
    Project the athlete's physiology over the horizon.

    Deterministic: the same input always yields the same trajectory.

    Args:
        simulation_input: Physiology and regimen
        duration_months: Horizon in months (≥ 0)

    Returns:
        duration_months + 1 snapshots, months 0..duration_months

    Raises:
        ValueError: If duration_months is negative
    """
    if duration_months < 0:
        raise ValueError(f"duration_months must be non-negative, got {duration_months}")

    static = derive_static_factors(simulation_input)
    state = initial_state(simulation_input)
    logger.debug(
        "Simulating %d months: %s (stimulus=%.3f, recovery=%.3f)",
        duration_months,
        simulation_input.regimen,
        static.base_training_stimulus,
        static.base_recovery_factor,
    )

    trajectory: Trajectory = []
    for month in range(duration_months + 1):
        factors = monthly_factors(state, month, static)
        trajectory.append(to_data_point(month, state, factors))
        if month == duration_months:
            break
        state = step_month(state, month, static)

    return trajectory
