"""
Age-dependent reference ranges shown next to the physiology inputs.

Bands move linearly from a growth-phase base at age 11 to a peak at each
metric's peak age, then decline (strength, endurance) or drift upward
(body fat) afterwards.
"""

import math

from .models import ReferenceRanges

GROWTH_START_AGE = 11
ADULT_WEIGHT_AGE = 20
PEAK_FAT_AGE = 25
PEAK_STRENGTH_AGE = 28
PEAK_ENDURANCE_AGE = 32
DECLINE_PER_YEAR = 0.012  # Strength/endurance band decline after peak


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _growth_band(
    age: float,
    peak_age: float,
    base: tuple[float, float],
    peak: tuple[float, float],
) -> tuple[int, int]:
    """Interpolate a (low, high) band from `base` at age 11 to `peak` at `peak_age`."""
    progress = max(0.0, (age - GROWTH_START_AGE) / (peak_age - GROWTH_START_AGE))
    low = base[0] + (peak[0] - base[0]) * progress
    high = base[1] + (peak[1] - base[1]) * progress
    return _round_half_up(low), _round_half_up(high)


def _performance_band(age: float, peak_age: float, base: tuple[float, float]) -> tuple[int, int]:
    """Novice/elite band for strength or endurance."""
    if age < peak_age:
        return _growth_band(age, peak_age, base, (80, 150))
    decline = 1 - max(0.0, age - peak_age) * DECLINE_PER_YEAR
    return _round_half_up(80 * decline), _round_half_up(150 * decline)


def reference_ranges(age: float) -> ReferenceRanges:
    """
    Typical ranges for an athlete of the given age.

    Args:
        age: Age in years

    Returns:
        ReferenceRanges with one display string per physiology input
    """
    if age < ADULT_WEIGHT_AGE:
        weight_min, weight_max = _growth_band(age, ADULT_WEIGHT_AGE, (35, 45), (65, 85))
    else:
        weight_min, weight_max = 65, 90

    if age < PEAK_FAT_AGE:
        fat_min, fat_max = _growth_band(age, PEAK_FAT_AGE, (12, 20), (8, 15))
    else:
        shift = math.floor(max(0.0, age - PEAK_FAT_AGE) / 5)
        fat_min, fat_max = 8 + shift, 15 + shift

    strength_novice, strength_elite = _performance_band(age, PEAK_STRENGTH_AGE, (30, 60))
    endurance_novice, endurance_elite = _performance_band(age, PEAK_ENDURANCE_AGE, (40, 70))

    return ReferenceRanges(
        age=age,
        body_weight=f"Avg: {weight_min}-{weight_max}kg",
        muscle_mass_percentage="Athlete: 35-45%",
        body_fat=f"Athlete: {fat_min}-{fat_max}%",
        strength_index=f"Novice: {strength_novice}, Elite: {strength_elite}+",
        endurance_index=f"Novice: {endurance_novice}, Elite: {endurance_elite}+",
        mobility_score="Athlete: 60-85+",
    )
