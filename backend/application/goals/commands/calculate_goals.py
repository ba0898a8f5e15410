"""GoalCalculationUseCase - calculate, validate and store daily goals."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Tuple, Union

import structlog

from domain.goals.core.entities.daily_goals import (
    FRESHNESS_WINDOW,
    DailyGoals,
    as_utc,
)
from domain.goals.core.entities.user_profile import UserProfile
from domain.goals.core.ports.repository import IGoalsRepository, IProfileRepository
from domain.goals.core.value_objects.breakdowns import GoalCalculationBreakdown
from domain.goals.core.value_objects.calculation_source import CalculationSource

from ..orchestrators.goal_calculation_service import GoalCalculationService
from ..retry_policy import RetryPolicy

logger = structlog.get_logger(__name__)


class GoalCalculationErrorKind(str, Enum):
    """Why a goal calculation did not produce stored goals."""

    PROFILE_NOT_FOUND = "profile_not_found"
    PROFILE_FETCH_FAILED = "profile_fetch_failed"
    CALCULATION_FAILED = "calculation_failed"
    VALIDATION_FAILED = "validation_failed"
    STORAGE_FAILED = "storage_failed"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class GoalCalculationSuccess:
    """Goals are available for the owner.

    Attributes:
        goals: Current goals (stored or newly calculated)
        was_recalculated: False when fresh stored goals were reused
        source: Provenance of the goals
    """

    goals: DailyGoals
    was_recalculated: bool
    source: CalculationSource

    is_success = True


@dataclass(frozen=True)
class GoalCalculationFailure:
    """Goal calculation failed.

    Attributes:
        kind: Error category
        message: Diagnostic message (not user-facing)
        issues: Validation issues for VALIDATION_FAILED
        cause: Underlying exception, if any
    """

    kind: GoalCalculationErrorKind
    message: str
    issues: Tuple[str, ...] = ()
    cause: Optional[BaseException] = field(default=None, compare=False)

    is_success = False


GoalCalculationResult = Union[GoalCalculationSuccess, GoalCalculationFailure]


class GoalCalculationUseCase:
    """Calculate and persist daily goals for an owner.

    Pipeline:
    1. Reuse stored goals if fresh and not fallback (unless forced)
    2. Fetch profile (retried)
    3. Calculate goals (retried)
    4. Validate against standard bounds
    5. Persist and sync (retried)

    Every failure is returned as a GoalCalculationFailure, never raised.
    Persistence is retried, so save_and_sync_goals must be idempotent.
    """

    def __init__(
        self,
        profile_repository: IProfileRepository,
        goals_repository: IGoalsRepository,
        calculation_service: GoalCalculationService,
        retry_policy: Optional[RetryPolicy] = None,
        freshness_window: timedelta = FRESHNESS_WINDOW,
    ):
        self._profile_repository = profile_repository
        self._goals_repository = goals_repository
        self._calculation_service = calculation_service
        self._retry_policy = retry_policy or RetryPolicy()
        self._freshness_window = freshness_window

    async def calculate_and_store_goals(
        self,
        owner_id: str,
        force_recalculation: bool = False,
    ) -> GoalCalculationResult:
        """
        Return current goals, recalculating them when needed.

        Args:
            owner_id: User identifier
            force_recalculation: Skip the freshness check

        Returns:
            GoalCalculationResult

        Example:
            >>> result = await use_case.calculate_and_store_goals("user123")
            >>> if result.is_success:
            ...     print(result.goals.steps_goal, result.was_recalculated)
        """
        try:
            if not force_recalculation:
                current = await self._goals_repository.get_current_goals(owner_id)
                last_calculated = await self._goals_repository.get_last_calculation_time(
                    owner_id
                )
                if current is not None and self._can_reuse(current, last_calculated):
                    logger.debug(
                        "Reusing fresh goals",
                        owner_id=owner_id,
                        goals=current.sanitize_for_logging(),
                    )
                    return GoalCalculationSuccess(
                        goals=current,
                        was_recalculated=False,
                        source=current.calculation_source,
                    )

            return await self._calculate_and_persist(owner_id, profile=None)
        except Exception as e:
            return self._unexpected(owner_id, e)

    async def recalculate_goals_for_profile_update(
        self,
        owner_id: str,
        profile: Optional[UserProfile] = None,
    ) -> GoalCalculationResult:
        """
        Recalculate goals after a profile change, ignoring freshness.

        Args:
            owner_id: User identifier
            profile: Already-loaded profile, fetched when omitted

        Returns:
            GoalCalculationResult
        """
        try:
            return await self._calculate_and_persist(owner_id, profile=profile)
        except Exception as e:
            return self._unexpected(owner_id, e)

    async def has_valid_goals(self, owner_id: str) -> bool:
        """
        Check whether stored goals can be used as-is.

        Fallback goals never count: a real calculation is still owed.

        Returns:
            bool: True if goals exist, are in range, fresh and formula-based
        """
        try:
            goals = await self._goals_repository.get_current_goals(owner_id)
        except Exception as e:
            logger.warning(
                "Could not read goals for validity check",
                owner_id=owner_id,
                error=str(e),
                exc_info=True,
            )
            return False

        return (
            goals is not None
            and goals.is_valid()
            and goals.is_fresh(max_age=self._freshness_window)
            and goals.calculation_source == CalculationSource.STANDARD_FORMULA
        )

    async def get_calculation_breakdown(
        self, owner_id: str
    ) -> Optional[GoalCalculationBreakdown]:
        """
        Diagnostic breakdown of the formulas for the owner's profile.

        Returns:
            GoalCalculationBreakdown, or None if no valid profile is available
        """
        try:
            profile = await self._retry_policy.run(
                "get_profile", self._profile_repository.get_profile, owner_id,
                owner_id=owner_id,
            )
        except Exception as e:
            logger.warning(
                "Could not load profile for breakdown",
                owner_id=owner_id,
                error=str(e),
            )
            return None

        if profile is None:
            return None
        return self._calculation_service.get_calculation_breakdown(profile)

    def _can_reuse(self, goals: DailyGoals, last_calculated: Optional[datetime]) -> bool:
        if goals.is_fallback:
            return False
        reference = as_utc(last_calculated) if last_calculated else goals.calculated_at
        return datetime.now(timezone.utc) - reference < self._freshness_window

    async def _calculate_and_persist(
        self,
        owner_id: str,
        profile: Optional[UserProfile],
    ) -> GoalCalculationResult:
        if profile is None:
            try:
                profile = await self._retry_policy.run(
                    "get_profile", self._profile_repository.get_profile, owner_id,
                    owner_id=owner_id,
                )
            except Exception as e:
                return self._failure(
                    owner_id,
                    GoalCalculationErrorKind.PROFILE_FETCH_FAILED,
                    f"Could not load profile for {owner_id}: {e}",
                    cause=e,
                )

            if profile is None:
                return self._failure(
                    owner_id,
                    GoalCalculationErrorKind.PROFILE_NOT_FOUND,
                    f"Profile not found: {owner_id}",
                )

        try:
            goals = await self._retry_policy.run(
                "calculate_goals", self._calculate, profile, owner_id=owner_id
            )
        except Exception as e:
            return self._failure(
                owner_id,
                GoalCalculationErrorKind.CALCULATION_FAILED,
                f"Goal calculation failed for {owner_id}: {e}",
                cause=e,
            )

        issues = goals.validation_issues()
        if issues:
            return self._failure(
                owner_id,
                GoalCalculationErrorKind.VALIDATION_FAILED,
                "Calculated goals failed validation",
                issues=tuple(issues),
            )

        try:
            stored = await self._retry_policy.run(
                "save_and_sync_goals",
                self._goals_repository.save_and_sync_goals,
                goals,
                owner_id=owner_id,
            )
        except Exception as e:
            return self._failure(
                owner_id,
                GoalCalculationErrorKind.STORAGE_FAILED,
                f"Could not store goals for {owner_id}: {e}",
                cause=e,
            )

        logger.info(
            "Goals recalculated and stored",
            owner_id=owner_id,
            goals=stored.sanitize_for_logging(),
        )
        return GoalCalculationSuccess(
            goals=stored,
            was_recalculated=True,
            source=stored.calculation_source,
        )

    async def _calculate(self, profile: UserProfile) -> DailyGoals:
        return self._calculation_service.calculate_goals(profile)

    def _failure(
        self,
        owner_id: str,
        kind: GoalCalculationErrorKind,
        message: str,
        issues: Tuple[str, ...] = (),
        cause: Optional[BaseException] = None,
    ) -> GoalCalculationFailure:
        logger.error(
            "Goal calculation failed",
            owner_id=owner_id,
            kind=kind.value,
            message=message,
            issues=list(issues),
        )
        return GoalCalculationFailure(kind=kind, message=message, issues=issues, cause=cause)

    def _unexpected(self, owner_id: str, error: Exception) -> GoalCalculationFailure:
        logger.exception("Unexpected error during goal calculation", owner_id=owner_id)
        return GoalCalculationFailure(
            kind=GoalCalculationErrorKind.UNEXPECTED_ERROR,
            message=f"Unexpected error: {error}",
            cause=error,
        )
