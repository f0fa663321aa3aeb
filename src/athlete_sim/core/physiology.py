"""
Physiological response curves.

Pure functions for the age curves, training load, recovery quality and the
monthly adaptation deltas. simulator.py composes them into a month-by-month
state transition.
"""

from .config import (
    ADAPTATION_ENDURANCE_RATE,
    ADAPTATION_STRENGTH_RATE,
    AGE_FACTOR_DECLINE_PER_YEAR,
    AGE_FACTOR_GROWTH_BASE,
    AGE_FACTOR_MIN,
    AGE_GROWTH_START,
    AGE_PEAK_END,
    AGE_PEAK_START,
    DIET_BASE,
    ENDURANCE_GAIN_COEF,
    ENDURANCE_MOBILITY_WEIGHT,
    ENDURANCE_REFERENCE,
    FAT_FROM_DIET,
    FAT_FROM_SLEEP,
    FAT_LOSS_PER_STIMULUS,
    HOURS_LINEAR,
    HOURS_QUADRATIC,
    INTENSITY_BASE,
    MOBILITY_REFERENCE,
    MOBILITY_SLOPE,
    MUSCLE_GAIN_COEF,
    RECOVERY_BONUS_MAX,
    RECOVERY_BONUS_PER_MONTH,
    RECOVERY_FACTOR_MAX,
    SLEEP_TARGET_HOURS,
    STRENGTH_GAIN_COEF,
    STRENGTH_INTENSITY_WEIGHT,
    VO2_DECLINE_PER_YEAR,
    VO2_ENDURANCE_OFFSET,
    VO2_GAIN_COEF,
    VO2_GROWTH_BASE,
    VO2_GROWTH_END_AGE,
    VO2_GROWTH_START_AGE,
    VO2_PEAK,
    VO2_PEAK_END_AGE,
)
from .models import InitialPhysiology


def vo2_max_age_baseline(age: float) -> float:
    """
    VO2max baseline for an untrained-reference athlete of the given age.

    age < 20:        38 → 45 linear growth from age 11
    20 ≤ age ≤ 25:   45 (peak)
    age > 25:        45 − 0.3 × (age − 25)

    Args:
        age: Age in years

    Returns:
        Baseline VO2max (ml/kg/min)
    """
    if age < VO2_GROWTH_END_AGE:
        progress = (age - VO2_GROWTH_START_AGE) / (VO2_GROWTH_END_AGE - VO2_GROWTH_START_AGE)
        return VO2_GROWTH_BASE + progress * (VO2_PEAK - VO2_GROWTH_BASE)
    if age <= VO2_PEAK_END_AGE:
        return VO2_PEAK
    return VO2_PEAK - (age - VO2_PEAK_END_AGE) * VO2_DECLINE_PER_YEAR


def initial_vo2_max(physiology: InitialPhysiology) -> float:
    """
    Starting VO2max: age baseline shifted by endurance above/below 100.

    VO2_0 = baseline(age) + (endurance − 100) × 0.2
    """
    offset = (physiology.endurance_index - ENDURANCE_REFERENCE) * VO2_ENDURANCE_OFFSET
    return vo2_max_age_baseline(physiology.age) + offset


def initial_muscle_mass(physiology: InitialPhysiology) -> float:
    """Starting muscle mass in kg."""
    return physiology.body_weight * (physiology.muscle_mass_percentage / 100)


def initial_body_fat_mass(physiology: InitialPhysiology) -> float:
    """Starting body fat mass in kg."""
    return physiology.body_weight * (physiology.body_fat / 100)


def effective_training_hours(training_hours: float) -> float:
    """
    Effective daily training hours with overtraining penalty.

    H_eff = −0.08 × h² + h

    Peaks at h = 6.25 and turns negative beyond 12.5 hours.
    """
    return HOURS_QUADRATIC * training_hours**2 + HOURS_LINEAR * training_hours


def intensity_factor(intensity: float) -> float:
    """Map intensity 0-100 % onto a 0.5-1.5 multiplier."""
    return INTENSITY_BASE + intensity / 100


def base_training_stimulus(training_hours: float, intensity: float) -> float:
    """
    Monthly training stimulus before adaptation.

    stimulus = max(0, H_eff × intensity_factor)
    """
    return max(0.0, effective_training_hours(training_hours) * intensity_factor(intensity))


def sleep_quality(sleep_hours: float) -> float:
    """
    Quadratic penalty for sleeping under 8 hours, capped at 1.0.

    Q_sleep = min(1, h / 8)²
    """
    return min(1.0, sleep_hours / SLEEP_TARGET_HOURS) ** 2


def diet_quality(diet: float) -> float:
    """Map diet quality 0-100 % onto a 0.5-1.5 multiplier."""
    return DIET_BASE + diet / 100


def mobility_factor(mobility_score: float) -> float:
    """
    Mobility multiplier on strength and muscle gains.

    F_mob = 1 + (mobility − 50) × 0.002   (+10 % at 100, −4 % at 30)
    """
    return 1 + (mobility_score - MOBILITY_REFERENCE) * MOBILITY_SLOPE


def age_factor(current_age: float) -> float:
    """
    Age-dependent adaptation multiplier.

    age < 20:        0.8 → 1.0 linear from age 11 (growth)
    20 ≤ age ≤ 30:   1.0 (peak)
    age > 30:        1 − 0.005 × (age − 30) (decline)

    Floored at 0.5.

    Args:
        current_age: Age in years, may be fractional

    Returns:
        Age factor in [0.5, 1.0]
    """
    if current_age < AGE_PEAK_START:
        progress = (current_age - AGE_GROWTH_START) / (AGE_PEAK_START - AGE_GROWTH_START)
        factor = AGE_FACTOR_GROWTH_BASE + progress * (1.0 - AGE_FACTOR_GROWTH_BASE)
    elif current_age <= AGE_PEAK_END:
        factor = 1.0
    else:
        factor = 1.0 - (current_age - AGE_PEAK_END) * AGE_FACTOR_DECLINE_PER_YEAR
    return max(AGE_FACTOR_MIN, factor)


def adaptation_multiplier(
    strength_index: float,
    endurance_index: float,
    initial_strength: float,
    initial_endurance: float,
) -> float:
    """
    Diminishing-returns multiplier on stimulus.

    A = 1 / (1 + 0.005 × ΔS + 0.005 × ΔE)

    The same workload produces less stimulus as the athlete gets fitter.
    """
    gained = (
        ADAPTATION_STRENGTH_RATE * (strength_index - initial_strength)
        + ADAPTATION_ENDURANCE_RATE * (endurance_index - initial_endurance)
    )
    return 1 / (1 + gained)


def recovery_factor(base_recovery: float, month: int) -> float:
    """
    Recovery factor with accumulated-consistency bonus.

    R = min(1.5, R_base + min(0.15, 0.005 × month))
    """
    bonus = min(RECOVERY_BONUS_MAX, month * RECOVERY_BONUS_PER_MONTH)
    return min(RECOVERY_FACTOR_MAX, base_recovery + bonus)


# ---------------------------------------------------------------------------
# Monthly deltas
# ---------------------------------------------------------------------------


def muscle_gain(stimulus: float, recovery: float, age_f: float, mobility: float) -> float:
    """Muscle mass gained this month (kg)."""
    return MUSCLE_GAIN_COEF * stimulus * recovery * age_f * mobility


def strength_gain(
    stimulus: float,
    intensity_f: float,
    recovery: float,
    age_f: float,
    mobility: float,
) -> float:
    """Strength index gained this month. Scales with intensity and mobility."""
    return (
        STRENGTH_GAIN_COEF
        * stimulus
        * (intensity_f * STRENGTH_INTENSITY_WEIGHT)
        * recovery
        * age_f
        * mobility
    )


def endurance_gain(stimulus: float, recovery: float, age_f: float, mobility: float) -> float:
    """Endurance index gained this month. Gets half of the mobility effect."""
    mobility_effect = 1 + (mobility - 1) * ENDURANCE_MOBILITY_WEIGHT
    return ENDURANCE_GAIN_COEF * stimulus * recovery * age_f * mobility_effect


def vo2_max_gain(stimulus: float, recovery: float, age_f: float) -> float:
    """VO2max gained this month (ml/kg/min)."""
    return VO2_GAIN_COEF * stimulus * recovery * age_f


def fat_mass_change(stimulus: float, diet_q: float, sleep_q: float) -> float:
    """
    Body fat mass change this month (kg); negative means fat lost.

    ΔF = −0.25 × stimulus + (1 − Q_diet) × 0.1 + (1 − Q_sleep) × 0.05

    Training burns fat; diet quality under 1.0 (< 50 %) and short sleep
    add it back.
    """
    return (
        FAT_LOSS_PER_STIMULUS * stimulus
        + (1 - diet_q) * FAT_FROM_DIET
        + (1 - sleep_q) * FAT_FROM_SLEEP
    )
