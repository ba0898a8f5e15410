"""GoalCalculationService - runs the calculators with atomic fallback."""

import time
from typing import Optional

import structlog

from domain.goals.calculation.fallback_generator import FallbackGoalGenerator
from domain.goals.core.entities.daily_goals import DailyGoals
from domain.goals.core.entities.user_profile import UserProfile
from domain.goals.core.ports.calculators import (
    ICaloriesGoalCalculator,
    IHeartPointsGoalCalculator,
    IStepsGoalCalculator,
)
from domain.goals.core.value_objects.breakdowns import GoalCalculationBreakdown
from domain.goals.core.value_objects.calculation_source import CalculationSource
from domain.goals.core.value_objects.goal_bounds import STANDARD_BOUNDS
from domain.goals.core.value_objects.goal_calculation_input import (
    GoalCalculationInput,
)

logger = structlog.get_logger(__name__)


class GoalCalculationService:
    """
    Orchestrates the three goal calculators.

    Flow:
    1. Convert the profile to validated calculation input
    2. Run steps, calories and heart points calculators
    3. On any calculator failure, replace the whole goal set with fallback
    4. Reject out-of-bounds results in favour of fallback

    Holds no mutable state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        steps_calculator: IStepsGoalCalculator,
        calories_calculator: ICaloriesGoalCalculator,
        heart_points_calculator: IHeartPointsGoalCalculator,
        fallback_generator: FallbackGoalGenerator,
    ):
        self._steps_calculator = steps_calculator
        self._calories_calculator = calories_calculator
        self._heart_points_calculator = heart_points_calculator
        self._fallback_generator = fallback_generator

    def calculate_goals(self, profile: UserProfile) -> DailyGoals:
        """
        Calculate goals for a profile.

        Profiles that are incomplete or out of range get fallback goals
        personalised with whatever data they do hold.

        Args:
            profile: User profile

        Returns:
            DailyGoals with source STANDARD_FORMULA or FALLBACK_DEFAULT
        """
        calculation_input = profile.to_goal_calculation_input()
        if calculation_input is None:
            logger.warning(
                "Profile not valid for goal calculation, using fallback",
                profile=profile.sanitize_for_logging(),
            )
            return self._fallback_generator.generate_fallback_goals(
                profile.owner_id, profile
            )

        return self.calculate_from_input(profile.owner_id, calculation_input, profile)

    def calculate_from_input(
        self,
        owner_id: str,
        calculation_input: GoalCalculationInput,
        profile: Optional[UserProfile] = None,
    ) -> DailyGoals:
        """
        Calculate goals from validated input.

        If any calculator raises, none of the personalised values are
        kept: the entire result is fallback.

        Args:
            owner_id: User identifier stamped on the goals
            calculation_input: Validated biometrics
            profile: Source profile, used to personalise fallback

        Returns:
            DailyGoals
        """
        started = time.perf_counter()

        try:
            goals = DailyGoals(
                owner_id=owner_id,
                steps_goal=self._steps_calculator.calculate_steps_goal(calculation_input),
                calories_goal=self._calories_calculator.calculate_calories_goal(
                    calculation_input
                ),
                heart_points_goal=self._heart_points_calculator.calculate_heart_points_goal(
                    calculation_input
                ),
                calculation_source=CalculationSource.STANDARD_FORMULA,
            )
        except Exception as e:
            logger.warning(
                "Goal calculator failed, using fallback",
                owner_id=owner_id,
                failure=self._fallback_generator.classify_failure(e),
                error=str(e),
                input=calculation_input.sanitize_for_logging(),
            )
            return self._fallback(owner_id, calculation_input, profile, e)

        issues = STANDARD_BOUNDS.violations(goals)
        if issues:
            logger.warning(
                "Calculated goals out of bounds, using fallback",
                owner_id=owner_id,
                issues=issues,
            )
            return self._fallback(owner_id, calculation_input, profile, None)

        logger.info(
            "Goals calculated",
            owner_id=owner_id,
            goals=goals.sanitize_for_logging(),
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
        )
        return goals

    def get_calculation_breakdown(
        self, profile: UserProfile
    ) -> Optional[GoalCalculationBreakdown]:
        """
        Collect the intermediate values of every calculator.

        Returns:
            GoalCalculationBreakdown, or None if the profile is not valid
        """
        calculation_input = profile.to_goal_calculation_input()
        if calculation_input is None:
            return None

        return GoalCalculationBreakdown(
            age=calculation_input.age,
            gender=calculation_input.gender,
            activity_level=calculation_input.activity_level,
            steps=self._steps_calculator.get_calculation_breakdown(calculation_input),
            calories=self._calories_calculator.get_calculation_breakdown(
                calculation_input
            ),
            heart_points=self._heart_points_calculator.get_calculation_breakdown(
                calculation_input
            ),
        )

    def _fallback(
        self,
        owner_id: str,
        calculation_input: GoalCalculationInput,
        profile: Optional[UserProfile],
        error: Optional[Exception],
    ) -> DailyGoals:
        if profile is None:
            return self._fallback_generator.generate_fallback_goals_for_input(
                owner_id, calculation_input
            )
        if error is not None:
            return self._fallback_generator.generate_fallback_goals_for_error(
                owner_id, error, profile
            )
        return self._fallback_generator.generate_fallback_goals(owner_id, profile)
