"""Goal calculators and fallback generation."""

from .calories_calculator import CaloriesGoalCalculator
from .fallback_generator import FallbackGoalGenerator
from .heart_points_calculator import HeartPointsGoalCalculator
from .steps_calculator import StepsGoalCalculator

__all__ = [
    "StepsGoalCalculator",
    "CaloriesGoalCalculator",
    "HeartPointsGoalCalculator",
    "FallbackGoalGenerator",
]
