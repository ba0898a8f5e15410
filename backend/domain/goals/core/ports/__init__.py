"""Ports (interfaces) for the goals domain."""

from .calculators import (
    ICaloriesGoalCalculator,
    IHeartPointsGoalCalculator,
    IStepsGoalCalculator,
)
from .recalculation_trigger import IRecalculationTrigger
from .repository import IGoalsRepository, IProfileRepository

__all__ = [
    "IStepsGoalCalculator",
    "ICaloriesGoalCalculator",
    "IHeartPointsGoalCalculator",
    "IProfileRepository",
    "IGoalsRepository",
    "IRecalculationTrigger",
]
