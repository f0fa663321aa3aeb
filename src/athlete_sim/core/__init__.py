"""
Simulation core for athlete-sim.

The two entry points used by the calling layer: simulate() projects one
regimen month by month, find_optimal_plan() searches the regimen grid.
"""

from .models import (
    InitialPhysiology,
    OptimizationResult,
    SimulationDataPoint,
    SimulationInput,
    TrainingRegimen,
    Trajectory,
)
from .optimizer import OptimizationFailure, find_optimal_plan
from .simulator import simulate

__all__ = [
    "InitialPhysiology",
    "OptimizationFailure",
    "OptimizationResult",
    "SimulationDataPoint",
    "SimulationInput",
    "TrainingRegimen",
    "Trajectory",
    "find_optimal_plan",
    "simulate",
]
