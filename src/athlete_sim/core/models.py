"""
Data models for athlete-sim.

All core dataclasses: simulation inputs, the per-month athlete state,
output snapshots, optimizer grid and results. Input ranges are not
validated here; that belongs to the calling layer (io/serializers.py).
"""

from dataclasses import dataclass, field
from typing import Literal

MetricName = Literal[
    "muscle_mass",
    "vo2_max",
    "body_fat",
    "strength_index",
    "endurance_index",
]
FactorName = Literal["training_stimulus", "recovery_factor", "age_factor"]


@dataclass(frozen=True)
class InitialPhysiology:
    """
    Starting physiology of the athlete.

    Expected ranges (checked by the caller): age 11-50 years, body weight
    30-120 kg, muscle mass 25-55 %, body fat 5-35 %, strength and endurance
    index 30-200 pts, mobility score 30-100 pts.
    """

    age: float
    body_weight: float  # kg
    muscle_mass_percentage: float  # % of body weight
    body_fat: float  # % of body weight
    strength_index: float
    endurance_index: float
    mobility_score: float


@dataclass(frozen=True)
class TrainingRegimen:
    """The four tunable training parameters."""

    training_hours: float  # hours/day, 0.5-6
    intensity: float  # %, 0-100
    diet: float  # quality %, 0-100
    sleep_hours: float  # hours/night, 4-10


@dataclass(frozen=True)
class SimulationInput:
    """Physiology plus regimen: everything one simulation run needs."""

    physiology: InitialPhysiology
    regimen: TrainingRegimen


@dataclass(frozen=True)
class StaticFactors:
    """
    Factors derived once per run from the input.

    They stay constant for the whole horizon; per-month variation comes
    from MonthlyFactors.
    """

    intensity_factor: float
    base_training_stimulus: float
    sleep_quality: float
    diet_quality: float
    base_recovery_factor: float
    mobility_factor: float
    start_age: float
    initial_strength: float
    initial_endurance: float


@dataclass(frozen=True)
class AthleteState:
    """
    Full-precision athlete state at the start of a month.

    body_weight moves by exactly (muscle delta + fat delta) each month.
    body_fat_mass >= 3 % of body_weight and body_fat_percentage >= 3.
    """

    body_weight: float
    muscle_mass: float
    body_fat_mass: float
    body_fat_percentage: float
    vo2_max: float
    strength_index: float
    endurance_index: float


@dataclass(frozen=True)
class MonthlyFactors:
    """Dynamic factors for a single month."""

    training_stimulus: float
    recovery_factor: float
    age_factor: float


@dataclass(frozen=True)
class SimulationDataPoint:
    """
    One monthly snapshot in a trajectory.

    Physiological metrics are rounded to 2 decimals, factors to 3.
    """

    month: int
    muscle_mass: float  # kg
    vo2_max: float  # ml/kg/min
    body_fat: float  # %
    strength_index: float
    endurance_index: float
    training_stimulus: float
    recovery_factor: float
    age_factor: float


Trajectory = list[SimulationDataPoint]


@dataclass(frozen=True)
class RegimenGrid:
    """
    Discrete option sets searched by the optimizer.

    Enumeration order is training_hours > intensity > diet > sleep_hours,
    with sleep_hours varying fastest.
    """

    training_hours: tuple[float, ...]
    intensity: tuple[float, ...]
    diet: tuple[float, ...]
    sleep_hours: tuple[float, ...]

    def dimensions(self) -> dict[str, tuple[float, ...]]:
        """Return the option sets keyed by TrainingRegimen field name, in order."""
        return {
            "training_hours": self.training_hours,
            "intensity": self.intensity,
            "diet": self.diet,
            "sleep_hours": self.sleep_hours,
        }

    @property
    def size(self) -> int:
        """Number of regimen combinations in the grid."""
        n = 1
        for options in self.dimensions().values():
            n *= len(options)
        return n


@dataclass(frozen=True)
class ScoreWeights:
    """Weights of each outcome ratio in the optimizer score."""

    muscle_mass: float
    vo2_max: float
    body_fat: float
    strength: float
    endurance: float


@dataclass(frozen=True)
class OptimizationResult:
    """Best regimen found in the grid, with its full trajectory."""

    regimen: TrainingRegimen
    trajectory: Trajectory = field(default_factory=list)
    score: float = float("-inf")
    candidates_evaluated: int = 0


@dataclass(frozen=True)
class MetricComparison:
    """
    Final-value comparison of one metric between two plans.

    difference = optimal - yours. is_improvement is True when the optimal
    plan is better by more than the comparison tolerance.
    """

    metric: MetricName
    label: str
    unit: str
    yours: float
    optimal: float
    difference: float
    higher_is_better: bool
    is_improvement: bool


@dataclass(frozen=True)
class ReferenceRanges:
    """Typical values for an athlete of a given age, as display strings."""

    age: float
    body_weight: str
    muscle_mass_percentage: str
    body_fat: str
    strength_index: str
    endurance_index: str
    mobility_score: str
