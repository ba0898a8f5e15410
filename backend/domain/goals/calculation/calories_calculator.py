"""CaloriesGoalCalculator - daily calories target from BMR and activity."""

from ..core.ports.calculators import ICaloriesGoalCalculator
from ..core.value_objects.breakdowns import CalorieCalculationBreakdown
from ..core.value_objects.gender import Gender
from ..core.value_objects.goal_bounds import STANDARD_BOUNDS
from ..core.value_objects.goal_calculation_input import GoalCalculationInput

HARRIS_BENEDICT = "Harris-Benedict (revised 1984)"
MIFFLIN_ST_JEOR = "Mifflin-St Jeor (gender-neutral)"


class CaloriesGoalCalculator(ICaloriesGoalCalculator):
    """Calculate the daily calories goal as TDEE.

    BMR formulas:
        Men (Harris-Benedict revised):
            BMR = 88.362 + 13.397 × weight + 4.799 × height - 5.677 × age
        Women (Harris-Benedict revised):
            BMR = 447.593 + 9.247 × weight + 3.098 × height - 4.330 × age
        Other/unspecified (Mifflin-St Jeor, sex term averaged out):
            BMR = 10 × weight + 6.25 × height - 5 × age + 5

    TDEE = BMR × PAL multiplier, truncated and clamped to [1200, 4000].

    References:
        Roza AM, Shizgal HM. The Harris Benedict equation reevaluated.
        Am J Clin Nutr. 1984;40(1):168-182.
    """

    def calculate_calories_goal(self, calculation_input: GoalCalculationInput) -> int:
        """Calculate the daily calories goal.

        Example:
            >>> calculator = CaloriesGoalCalculator()
            >>> calculator.calculate_calories_goal(
            ...     GoalCalculationInput(
            ...         age=30, gender=Gender.MALE, height_in_cm=175,
            ...         weight_in_kg=70.0, activity_level=ActivityLevel.MODERATE,
            ...     )
            ... )
            2628
        """
        return self.get_calculation_breakdown(calculation_input).final_goal

    def calculate_bmr(self, calculation_input: GoalCalculationInput) -> float:
        """Basal metabolic rate in kcal/day for the input's gender."""
        weight = calculation_input.weight_in_kg
        height = calculation_input.height_in_cm
        age = calculation_input.age

        if calculation_input.gender == Gender.MALE:
            return 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
        if calculation_input.gender == Gender.FEMALE:
            return 447.593 + 9.247 * weight + 3.098 * height - 4.330 * age
        return 10 * weight + 6.25 * height - 5 * age + 5

    def get_calculation_breakdown(
        self, calculation_input: GoalCalculationInput
    ) -> CalorieCalculationBreakdown:
        bmr = self.calculate_bmr(calculation_input)
        activity_factor = calculation_input.activity_level.pal_multiplier()
        tdee = bmr * activity_factor

        raw_goal = int(tdee)
        final_goal = STANDARD_BOUNDS.clamp_calories(raw_goal)

        return CalorieCalculationBreakdown(
            bmr=bmr,
            equation=(
                HARRIS_BENEDICT if calculation_input.gender.is_binary else MIFFLIN_ST_JEOR
            ),
            activity_level=calculation_input.activity_level,
            activity_factor=activity_factor,
            tdee=tdee,
            final_goal=final_goal,
            bounds_applied=final_goal != raw_goal,
        )
