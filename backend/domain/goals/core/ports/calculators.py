"""Calculator ports - interfaces for the daily goal formulas."""

from abc import ABC, abstractmethod

from ..value_objects.breakdowns import (
    CalorieCalculationBreakdown,
    HeartPointsCalculationBreakdown,
    StepsCalculationBreakdown,
)
from ..value_objects.goal_calculation_input import GoalCalculationInput


class IStepsGoalCalculator(ABC):
    """Port for the daily steps goal."""

    @abstractmethod
    def calculate_steps_goal(self, calculation_input: GoalCalculationInput) -> int:
        """Calculate the daily steps goal.

        Args:
            calculation_input: Validated biometrics

        Returns:
            int: Steps per day within the standard bounds
        """
        pass

    @abstractmethod
    def get_calculation_breakdown(
        self, calculation_input: GoalCalculationInput
    ) -> StepsCalculationBreakdown:
        pass


class ICaloriesGoalCalculator(ABC):
    """Port for the daily calories goal (BMR x activity factor)."""

    @abstractmethod
    def calculate_calories_goal(self, calculation_input: GoalCalculationInput) -> int:
        """Calculate the daily calories goal.

        Args:
            calculation_input: Validated biometrics

        Returns:
            int: kcal per day within the standard bounds
        """
        pass

    @abstractmethod
    def get_calculation_breakdown(
        self, calculation_input: GoalCalculationInput
    ) -> CalorieCalculationBreakdown:
        pass


class IHeartPointsGoalCalculator(ABC):
    """Port for the daily heart points goal."""

    @abstractmethod
    def calculate_heart_points_goal(
        self, calculation_input: GoalCalculationInput
    ) -> int:
        """Calculate the daily heart points goal.

        Args:
            calculation_input: Validated biometrics

        Returns:
            int: Heart points per day within the standard bounds
        """
        pass

    @abstractmethod
    def get_calculation_breakdown(
        self, calculation_input: GoalCalculationInput
    ) -> HeartPointsCalculationBreakdown:
        pass
