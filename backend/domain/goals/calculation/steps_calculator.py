"""StepsGoalCalculator - daily steps target."""

from ..core.ports.calculators import IStepsGoalCalculator
from ..core.value_objects.age_group import AgeGroup
from ..core.value_objects.breakdowns import StepsCalculationBreakdown
from ..core.value_objects.gender import Gender
from ..core.value_objects.goal_bounds import STANDARD_BOUNDS
from ..core.value_objects.goal_calculation_input import GoalCalculationInput

BASE_STEPS = 10_000

AGE_MULTIPLIERS = {
    AgeGroup.YOUTH: 1.2,
    AgeGroup.ADULT: 1.0,
    AgeGroup.OLDER_ADULT: 0.8,
}

GENDER_MULTIPLIERS = {
    Gender.MALE: 1.05,
    Gender.FEMALE: 0.95,
    Gender.OTHER: 1.0,
    Gender.UNSPECIFIED: 1.0,
}


class StepsGoalCalculator(IStepsGoalCalculator):
    """Calculate the daily steps goal from age and gender.

    Formula:
        steps = 10000 × age multiplier × gender multiplier

    Age multipliers: youth (<18) 1.2, adult 1.0, older adult (65+) 0.8.
    Gender multipliers: male 1.05, female 0.95, other/unspecified 1.0.
    The result is truncated and clamped to [5000, 20000].

    References:
        Tudor-Locke C, et al. How many steps/day are enough? for adults.
        Int J Behav Nutr Phys Act. 2011;8:79.
    """

    def calculate_steps_goal(self, calculation_input: GoalCalculationInput) -> int:
        """Calculate the daily steps goal.

        Example:
            >>> calculator = StepsGoalCalculator()
            >>> calculator.calculate_steps_goal(
            ...     GoalCalculationInput(
            ...         age=16, gender=Gender.UNSPECIFIED,
            ...         height_in_cm=170, weight_in_kg=60.0,
            ...     )
            ... )
            12000
        """
        return self.get_calculation_breakdown(calculation_input).final_goal

    def get_calculation_breakdown(
        self, calculation_input: GoalCalculationInput
    ) -> StepsCalculationBreakdown:
        age_group = calculation_input.age_group
        age_multiplier = AGE_MULTIPLIERS[age_group]
        gender_multiplier = GENDER_MULTIPLIERS[calculation_input.gender]

        adjusted = int(BASE_STEPS * age_multiplier * gender_multiplier)
        final_goal = STANDARD_BOUNDS.clamp_steps(adjusted)

        return StepsCalculationBreakdown(
            base_steps=BASE_STEPS,
            age_group=age_group,
            age_multiplier=age_multiplier,
            gender=calculation_input.gender,
            gender_multiplier=gender_multiplier,
            adjusted_steps=adjusted,
            final_goal=final_goal,
            bounds_applied=final_goal != adjusted,
        )
