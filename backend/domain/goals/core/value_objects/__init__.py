"""Value objects for the goals domain."""

from .activity_level import ActivityLevel
from .age_group import AgeGroup
from .breakdowns import (
    CalorieCalculationBreakdown,
    GoalCalculationBreakdown,
    HeartPointsCalculationBreakdown,
    StepsCalculationBreakdown,
)
from .calculation_source import CalculationSource
from .changes_summary import GOAL_AFFECTING_FIELDS, ChangesSummary
from .gender import Gender
from .goal_bounds import FALLBACK_BOUNDS, STANDARD_BOUNDS, GoalBounds
from .goal_calculation_input import GoalCalculationInput
from .unit_system import UnitSystem

__all__ = [
    "ActivityLevel",
    "AgeGroup",
    "CalculationSource",
    "CalorieCalculationBreakdown",
    "ChangesSummary",
    "GOAL_AFFECTING_FIELDS",
    "Gender",
    "GoalBounds",
    "GoalCalculationBreakdown",
    "GoalCalculationInput",
    "HeartPointsCalculationBreakdown",
    "STANDARD_BOUNDS",
    "FALLBACK_BOUNDS",
    "StepsCalculationBreakdown",
    "UnitSystem",
]
