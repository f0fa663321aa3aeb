"""
Configuration constants for the athlete physiology model.

All adjustable coefficients are centralized here for easy tuning.
The optimizer grid and score weights can be overridden from model.yaml
(see engine/config_loader.py); everything else is fixed.
"""

from typing import Final

from .models import RegimenGrid, ScoreWeights

# =============================================================================
# VO2MAX BASELINE BY AGE
# =============================================================================

VO2_GROWTH_START_AGE: Final[float] = 11.0
VO2_GROWTH_END_AGE: Final[float] = 20.0
VO2_PEAK_END_AGE: Final[float] = 25.0
VO2_GROWTH_BASE: Final[float] = 38.0  # ml/kg/min at age 11
VO2_PEAK: Final[float] = 45.0  # ml/kg/min, ages 20-25
VO2_DECLINE_PER_YEAR: Final[float] = 0.3
VO2_ENDURANCE_OFFSET: Final[float] = 0.2  # per endurance point above 100
ENDURANCE_REFERENCE: Final[float] = 100.0

# =============================================================================
# TRAINING LOAD
# =============================================================================

HOURS_QUADRATIC: Final[float] = -0.08  # Overtraining curvature
HOURS_LINEAR: Final[float] = 1.0
INTENSITY_BASE: Final[float] = 0.5  # intensity factor = base + intensity/100

# =============================================================================
# RECOVERY
# =============================================================================

SLEEP_TARGET_HOURS: Final[float] = 8.0
DIET_BASE: Final[float] = 0.5  # diet quality = base + diet/100
RECOVERY_BONUS_PER_MONTH: Final[float] = 0.005
RECOVERY_BONUS_MAX: Final[float] = 0.15  # Reached after 30 months
RECOVERY_FACTOR_MAX: Final[float] = 1.5

# =============================================================================
# MOBILITY
# =============================================================================

MOBILITY_REFERENCE: Final[float] = 50.0
MOBILITY_SLOPE: Final[float] = 0.002

# =============================================================================
# AGE FACTOR
# =============================================================================

AGE_GROWTH_START: Final[float] = 11.0
AGE_PEAK_START: Final[float] = 20.0
AGE_PEAK_END: Final[float] = 30.0
AGE_FACTOR_GROWTH_BASE: Final[float] = 0.8
AGE_FACTOR_DECLINE_PER_YEAR: Final[float] = 0.005
AGE_FACTOR_MIN: Final[float] = 0.5

# =============================================================================
# ADAPTATION (diminishing returns)
# =============================================================================

ADAPTATION_STRENGTH_RATE: Final[float] = 0.005
ADAPTATION_ENDURANCE_RATE: Final[float] = 0.005

# =============================================================================
# MONTHLY GAIN COEFFICIENTS
# =============================================================================

MUSCLE_GAIN_COEF: Final[float] = 0.2  # kg per unit stimulus
STRENGTH_GAIN_COEF: Final[float] = 2.0
STRENGTH_INTENSITY_WEIGHT: Final[float] = 0.5
ENDURANCE_GAIN_COEF: Final[float] = 0.9
ENDURANCE_MOBILITY_WEIGHT: Final[float] = 0.5  # Half the mobility effect
VO2_GAIN_COEF: Final[float] = 0.6

FAT_LOSS_PER_STIMULUS: Final[float] = -0.25  # kg
FAT_FROM_DIET: Final[float] = 0.1
FAT_FROM_SLEEP: Final[float] = 0.05

# =============================================================================
# FLOORS
# =============================================================================

BODY_FAT_FLOOR_FRACTION: Final[float] = 0.03  # Of body weight
BODY_FAT_FLOOR_PERCENT: Final[float] = 3.0

# =============================================================================
# OUTPUT PRECISION
# =============================================================================

METRIC_DECIMALS: Final[int] = 2
FACTOR_DECIMALS: Final[int] = 3

# =============================================================================
# OPTIMIZER
# =============================================================================

DEFAULT_GRID: Final[RegimenGrid] = RegimenGrid(
    training_hours=(1.5, 3.0, 4.5),
    intensity=(50.0, 75.0, 100.0),
    diet=(60.0, 80.0, 100.0),
    sleep_hours=(7.0, 8.0, 9.0),
)

DEFAULT_SCORE_WEIGHTS: Final[ScoreWeights] = ScoreWeights(
    muscle_mass=2.0,
    vo2_max=1.5,
    body_fat=1.0,
    strength=1.0,
    endurance=1.0,
)

COMPARISON_TOLERANCE: Final[float] = 0.05  # Smaller differences are "even"

# =============================================================================
# HORIZON
# =============================================================================

DURATION_CHOICES: Final[tuple[int, ...]] = (6, 12, 24, 36)
DEFAULT_DURATION_MONTHS: Final[int] = 12

# =============================================================================
# INPUT RANGES (enforced by the calling layer, never by the core)
# =============================================================================

# field -> (low, high, message)
INPUT_RANGES: Final[dict[str, tuple[float, float, str]]] = {
    "age": (11, 50, "Age must be between 11 and 50."),
    "body_weight": (30, 120, "Weight must be between 30 and 120 kg."),
    "muscle_mass_percentage": (25, 55, "Muscle mass must be between 25% and 55%."),
    "body_fat": (5, 35, "Body fat must be between 5% and 35%."),
    "strength_index": (30, 200, "Strength index must be between 30 and 200."),
    "endurance_index": (30, 200, "Endurance index must be between 30 and 200."),
    "mobility_score": (30, 100, "Mobility score must be between 30 and 100."),
    "training_hours": (0.5, 6, "Training hours must be between 0.5 and 6."),
    "intensity": (0, 100, "Intensity must be between 0 and 100%."),
    "diet": (0, 100, "Diet quality must be between 0 and 100%."),
    "sleep_hours": (4, 10, "Sleep hours must be between 4 and 10."),
}
