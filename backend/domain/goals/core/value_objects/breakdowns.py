"""Calculation breakdowns - auditable intermediate values of each formula.

Diagnostics only; these never reach end-user presentation.
"""

from dataclasses import dataclass

from .activity_level import ActivityLevel
from .age_group import AgeGroup
from .gender import Gender


@dataclass(frozen=True)
class StepsCalculationBreakdown:
    base_steps: int
    age_group: AgeGroup
    age_multiplier: float
    gender: Gender
    gender_multiplier: float
    adjusted_steps: int
    final_goal: int
    bounds_applied: bool


@dataclass(frozen=True)
class CalorieCalculationBreakdown:
    """Intermediate values of the calories formula.

    Attributes:
        bmr: Basal metabolic rate in kcal/day
        equation: Name of the BMR equation used
        activity_level: Activity tier applied
        activity_factor: PAL multiplier for the tier
        tdee: Total daily energy expenditure before clamping
        final_goal: Clamped daily calories goal
        bounds_applied: Whether clamping changed the value
    """

    bmr: float
    equation: str
    activity_level: ActivityLevel
    activity_factor: float
    tdee: float
    final_goal: int
    bounds_applied: bool


@dataclass(frozen=True)
class HeartPointsCalculationBreakdown:
    weekly_minutes: int
    daily_moderate_minutes: float
    base_heart_points: float
    age_multiplier: float
    activity_multiplier: float
    adjusted_goal: int
    final_goal: int
    bounds_applied: bool


@dataclass(frozen=True)
class GoalCalculationBreakdown:
    """Combined breakdown of the three calculators for one input."""

    age: int
    gender: Gender
    activity_level: ActivityLevel
    steps: StepsCalculationBreakdown
    calories: CalorieCalculationBreakdown
    heart_points: HeartPointsCalculationBreakdown
