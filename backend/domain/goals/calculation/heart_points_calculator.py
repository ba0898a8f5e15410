"""HeartPointsGoalCalculator - daily cardio target in heart points."""

from ..core.ports.calculators import IHeartPointsGoalCalculator
from ..core.value_objects.activity_level import ActivityLevel
from ..core.value_objects.age_group import AgeGroup
from ..core.value_objects.breakdowns import HeartPointsCalculationBreakdown
from ..core.value_objects.goal_bounds import STANDARD_BOUNDS
from ..core.value_objects.goal_calculation_input import GoalCalculationInput

WEEKLY_MODERATE_MINUTES = 150
DAYS_PER_WEEK = 7
POINTS_PER_MODERATE_MINUTE = 1

AGE_MULTIPLIERS = {
    AgeGroup.YOUTH: 1.2,
    AgeGroup.ADULT: 1.0,
    AgeGroup.OLDER_ADULT: 0.8,
}

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 0.9,
    ActivityLevel.LIGHT: 0.95,
    ActivityLevel.MODERATE: 1.0,
    ActivityLevel.ACTIVE: 1.1,
    ActivityLevel.VERY_ACTIVE: 1.15,
}


class HeartPointsGoalCalculator(IHeartPointsGoalCalculator):
    """Calculate the daily heart points goal.

    Based on the WHO recommendation of 150 minutes of moderate activity
    per week. One minute of moderate activity is one heart point.

    Formula:
        points = 150 / 7 × 1 × age multiplier × activity multiplier

    Truncated and clamped to [15, 50].
    """

    def calculate_heart_points_goal(
        self, calculation_input: GoalCalculationInput
    ) -> int:
        """Calculate the daily heart points goal.

        Example:
            >>> calculator = HeartPointsGoalCalculator()
            >>> calculator.calculate_heart_points_goal(
            ...     GoalCalculationInput(
            ...         age=30, gender=Gender.MALE, height_in_cm=175,
            ...         weight_in_kg=70.0, activity_level=ActivityLevel.MODERATE,
            ...     )
            ... )
            21
        """
        return self.get_calculation_breakdown(calculation_input).final_goal

    def get_calculation_breakdown(
        self, calculation_input: GoalCalculationInput
    ) -> HeartPointsCalculationBreakdown:
        daily_minutes = WEEKLY_MODERATE_MINUTES / DAYS_PER_WEEK
        base_points = daily_minutes * POINTS_PER_MODERATE_MINUTE
        age_multiplier = AGE_MULTIPLIERS[calculation_input.age_group]
        activity_multiplier = ACTIVITY_MULTIPLIERS[calculation_input.activity_level]

        adjusted = int(base_points * age_multiplier * activity_multiplier)
        final_goal = STANDARD_BOUNDS.clamp_heart_points(adjusted)

        return HeartPointsCalculationBreakdown(
            weekly_minutes=WEEKLY_MODERATE_MINUTES,
            daily_moderate_minutes=daily_minutes,
            base_heart_points=base_points,
            age_multiplier=age_multiplier,
            activity_multiplier=activity_multiplier,
            adjusted_goal=adjusted,
            final_goal=final_goal,
            bounds_applied=final_goal != adjusted,
        )

    @staticmethod
    def convert_heart_points_to_minutes(heart_points: int) -> int:
        """Minutes of moderate activity needed to earn the given points."""
        return heart_points // POINTS_PER_MODERATE_MINUTE

    @staticmethod
    def get_weekly_equivalent(daily_heart_points: int) -> int:
        return daily_heart_points * DAYS_PER_WEEK
