"""FallbackGoalGenerator - safe defaults when personalised goals fail."""

from typing import Optional

import structlog

from ..core.entities.daily_goals import DailyGoals
from ..core.entities.user_profile import UserProfile
from ..core.exceptions.domain_errors import InvalidGoalInputError
from ..core.value_objects.age_group import AgeGroup
from ..core.value_objects.calculation_source import CalculationSource
from ..core.value_objects.gender import Gender
from ..core.value_objects.goal_bounds import FALLBACK_BOUNDS
from ..core.value_objects.goal_calculation_input import GoalCalculationInput

BASE_STEPS = 7500
BASE_CALORIES = 1800
BASE_HEART_POINTS = 21

STEPS_AGE_MULTIPLIERS = {AgeGroup.YOUTH: 1.1, AgeGroup.ADULT: 1.0, AgeGroup.OLDER_ADULT: 0.9}
CALORIES_AGE_MULTIPLIERS = {AgeGroup.YOUTH: 1.15, AgeGroup.ADULT: 1.0, AgeGroup.OLDER_ADULT: 0.9}
HEART_POINTS_AGE_MULTIPLIERS = {AgeGroup.YOUTH: 1.1, AgeGroup.ADULT: 1.0, AgeGroup.OLDER_ADULT: 0.85}

STEPS_GENDER_MULTIPLIERS = {Gender.MALE: 1.02, Gender.FEMALE: 0.98}
CALORIES_GENDER_MULTIPLIERS = {Gender.MALE: 1.15, Gender.FEMALE: 0.9}

EMERGENCY_STEPS = 6000
EMERGENCY_CALORIES = 1600
EMERGENCY_HEART_POINTS = 18

INVALID_INPUT = "Invalid input data"
ARITHMETIC_FAILURE = "Mathematical calculation error"
MISSING_DATA = "Missing required data"
UNEXPECTED_FAILURE = "Unexpected calculation error"

logger = structlog.get_logger(__name__)


class FallbackGoalGenerator:
    """Generate conservative goals from whatever profile data is known.

    Adjustments follow the same directions as the standard calculators
    (younger and male raise targets, older and female lower them) but
    the result is clamped into a tighter safety band:
    steps [6000, 9000], calories [1400, 2400], heart points [17, 25].

    Output is deterministic apart from calculated_at.
    """

    def generate_fallback_goals(
        self,
        owner_id: str,
        profile: Optional[UserProfile] = None,
    ) -> DailyGoals:
        """Generate fallback goals, personalised by a partial profile if given.

        Age is only used when the profile has a birthday.

        Args:
            owner_id: User identifier
            profile: Possibly incomplete profile

        Returns:
            DailyGoals: Goals with source FALLBACK_DEFAULT

        Example:
            >>> FallbackGoalGenerator().generate_fallback_goals("user123").steps_goal
            7500
        """
        age_group = profile.age_group() if profile is not None else None
        gender = profile.gender if profile is not None else Gender.UNSPECIFIED
        return self._build(owner_id, age_group, gender)

    def generate_fallback_goals_for_input(
        self,
        owner_id: str,
        calculation_input: GoalCalculationInput,
    ) -> DailyGoals:
        """Generate fallback goals from already-validated biometrics."""
        return self._build(owner_id, calculation_input.age_group, calculation_input.gender)

    def generate_fallback_goals_for_error(
        self,
        owner_id: str,
        error: BaseException,
        profile: Optional[UserProfile] = None,
    ) -> DailyGoals:
        """Generate fallback goals after a calculation failure.

        The error only selects the diagnostic category; bounds are the
        same whatever the failure.
        """
        logger.warning(
            "Using fallback goals after calculation failure",
            owner_id=owner_id,
            category=self.classify_failure(error),
            error=str(error),
        )
        return self.generate_fallback_goals(owner_id, profile)

    @staticmethod
    def classify_failure(error: BaseException) -> str:
        """Map a calculation exception to a diagnostic category.

        Example:
            >>> FallbackGoalGenerator.classify_failure(ZeroDivisionError())
            'Mathematical calculation error'
        """
        if isinstance(error, (InvalidGoalInputError, ValueError)):
            return INVALID_INPUT
        if isinstance(error, ArithmeticError):
            return ARITHMETIC_FAILURE
        if isinstance(error, (TypeError, AttributeError, LookupError)):
            return MISSING_DATA
        return UNEXPECTED_FAILURE

    def create_emergency_fallback_goals(self, owner_id: str) -> DailyGoals:
        """Fixed ultra-conservative goals for when no context is available."""
        return DailyGoals(
            owner_id=owner_id,
            steps_goal=EMERGENCY_STEPS,
            calories_goal=EMERGENCY_CALORIES,
            heart_points_goal=EMERGENCY_HEART_POINTS,
            calculation_source=CalculationSource.FALLBACK_DEFAULT,
        )

    def validate_fallback_goals(self, goals: DailyGoals) -> bool:
        """Check goals are fallback-sourced and inside the fallback band."""
        return (
            goals.calculation_source == CalculationSource.FALLBACK_DEFAULT
            and FALLBACK_BOUNDS.contains(goals)
        )

    def _build(
        self,
        owner_id: str,
        age_group: Optional[AgeGroup],
        gender: Gender,
    ) -> DailyGoals:
        group = age_group or AgeGroup.ADULT

        steps = int(
            BASE_STEPS
            * STEPS_AGE_MULTIPLIERS[group]
            * STEPS_GENDER_MULTIPLIERS.get(gender, 1.0)
        )
        calories = int(
            BASE_CALORIES
            * CALORIES_AGE_MULTIPLIERS[group]
            * CALORIES_GENDER_MULTIPLIERS.get(gender, 1.0)
        )
        heart_points = int(BASE_HEART_POINTS * HEART_POINTS_AGE_MULTIPLIERS[group])

        return DailyGoals(
            owner_id=owner_id,
            steps_goal=FALLBACK_BOUNDS.clamp_steps(steps),
            calories_goal=FALLBACK_BOUNDS.clamp_calories(calories),
            heart_points_goal=FALLBACK_BOUNDS.clamp_heart_points(heart_points),
            calculation_source=CalculationSource.FALLBACK_DEFAULT,
        )
