"""ProfileUpdateUseCase - persist profile edits and keep goals in step."""

import asyncio
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional, Set, Union

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError

from domain.goals.change_detection.profile_change_detector import (
    ProfileChangeDetector,
)
from domain.goals.core.entities.user_profile import UserProfile
from domain.goals.core.ports.recalculation_trigger import IRecalculationTrigger
from domain.goals.core.ports.repository import IProfileRepository
from domain.goals.core.value_objects.changes_summary import ChangesSummary
from domain.goals.core.value_objects.gender import Gender
from domain.goals.core.value_objects.unit_system import UnitSystem

from .calculate_goals import GoalCalculationResult, GoalCalculationUseCase

logger = structlog.get_logger(__name__)


class ProfilePatch(BaseModel):
    """Sparse set of profile field changes.

    Only keys present in the input are applied; unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    display_name: str = ""
    first_name: str = ""
    last_name: str = ""
    birthday: Optional[date] = None
    gender: Gender = Gender.UNSPECIFIED
    unit_system: UnitSystem = UnitSystem.METRIC
    height_in_cm: int = 0
    weight_in_kg: float = 0.0
    has_completed_onboarding: bool = False

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class ProfileUpdateErrorKind(str, Enum):
    """Why a profile update was not applied."""

    CONCURRENT_UPDATE = "concurrent_update"
    PROFILE_NOT_FOUND = "profile_not_found"
    PROFILE_UPDATE_FAILED = "profile_update_failed"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class ProfileUpdateSuccess:
    """Profile was stored.

    Attributes:
        updated_profile: Profile as stored
        goal_recalculation_result: Result of the recalculation, None if skipped.
            May itself be a failure: the profile update still succeeded.
        changes_summary: Goal-relevant change analysis
    """

    updated_profile: UserProfile
    goal_recalculation_result: Optional[GoalCalculationResult]
    changes_summary: ChangesSummary

    is_success = True

    @property
    def goals_recalculated(self) -> bool:
        result = self.goal_recalculation_result
        return result is not None and result.is_success


@dataclass(frozen=True)
class ProfileUpdateFailure:
    kind: ProfileUpdateErrorKind
    message: str
    cause: Optional[BaseException] = field(default=None, compare=False)

    is_success = False


ProfileUpdateResult = Union[ProfileUpdateSuccess, ProfileUpdateFailure]


class ProfileUpdateUseCase:
    """Store profile edits and recalculate goals when they are affected.

    At most one update per owner runs at a time: a concurrent call for
    the same owner fails fast with CONCURRENT_UPDATE instead of queueing.
    Updates for different owners are independent.
    """

    def __init__(
        self,
        profile_repository: IProfileRepository,
        goal_calculation_use_case: GoalCalculationUseCase,
        change_detector: Optional[ProfileChangeDetector] = None,
        recalculation_trigger: Optional[IRecalculationTrigger] = None,
    ):
        self._profile_repository = profile_repository
        self._goal_calculation_use_case = goal_calculation_use_case
        self._change_detector = change_detector or ProfileChangeDetector()
        self._recalculation_trigger = recalculation_trigger
        self._updates_in_progress: Set[str] = set()
        self._lock = asyncio.Lock()

    async def update_profile_with_goal_recalculation(
        self,
        updated_profile: UserProfile,
        force_goal_recalculation: bool = False,
    ) -> ProfileUpdateResult:
        """
        Persist a profile and recalculate goals if warranted.

        Recalculation runs when forced, for a new profile, when the profile
        becomes valid, or when a goal-affecting field changes on a valid
        profile. It is skipped when the profile becomes invalid.

        Args:
            updated_profile: Complete profile to store
            force_goal_recalculation: Recalculate regardless of changes

        Returns:
            ProfileUpdateResult

        Example:
            >>> result = await use_case.update_profile_with_goal_recalculation(
            ...     profile.with_updates(weight_in_kg=72.5)
            ... )
            >>> result.changes_summary.changed_fields
            frozenset({'weight_in_kg'})
        """
        owner_id = updated_profile.owner_id

        if not await self._mark_in_progress(owner_id):
            logger.warning("Concurrent profile update rejected", owner_id=owner_id)
            return ProfileUpdateFailure(
                kind=ProfileUpdateErrorKind.CONCURRENT_UPDATE,
                message=f"Profile update already in progress for {owner_id}",
            )

        try:
            return await self._update(updated_profile, force_goal_recalculation)
        except Exception as e:
            logger.exception("Unexpected error during profile update", owner_id=owner_id)
            return ProfileUpdateFailure(
                kind=ProfileUpdateErrorKind.UNEXPECTED_ERROR,
                message=f"Unexpected error: {e}",
                cause=e,
            )
        finally:
            await self._clear_in_progress(owner_id)

    async def update_profile_partially(
        self,
        owner_id: str,
        field_map: Mapping[str, Any],
    ) -> ProfileUpdateResult:
        """
        Merge a sparse set of field changes onto the stored profile.

        Args:
            owner_id: User identifier
            field_map: Field name to new value; unknown names are ignored

        Returns:
            ProfileUpdateResult from the full update path
        """
        ignored = sorted(set(field_map) - set(ProfilePatch.model_fields))
        if ignored:
            logger.info("Ignoring unknown profile fields", owner_id=owner_id, fields=ignored)

        try:
            patch = ProfilePatch.model_validate(dict(field_map))
        except ValidationError as e:
            logger.warning("Invalid partial profile update", owner_id=owner_id, error=str(e))
            return ProfileUpdateFailure(
                kind=ProfileUpdateErrorKind.UNEXPECTED_ERROR,
                message=f"Invalid profile fields: {e}",
                cause=e,
            )

        try:
            stored = await self._profile_repository.get_profile(owner_id)
        except Exception as e:
            logger.exception("Could not load profile for partial update", owner_id=owner_id)
            return ProfileUpdateFailure(
                kind=ProfileUpdateErrorKind.UNEXPECTED_ERROR,
                message=f"Unexpected error: {e}",
                cause=e,
            )

        if stored is None:
            return ProfileUpdateFailure(
                kind=ProfileUpdateErrorKind.PROFILE_NOT_FOUND,
                message=f"Profile not found: {owner_id}",
            )

        return await self.update_profile_with_goal_recalculation(
            stored.with_updates(**patch.changes())
        )

    def is_update_in_progress(self, owner_id: str) -> bool:
        return owner_id in self._updates_in_progress

    @property
    def ongoing_updates_count(self) -> int:
        return len(self._updates_in_progress)

    async def _update(
        self,
        updated_profile: UserProfile,
        force_goal_recalculation: bool,
    ) -> ProfileUpdateResult:
        owner_id = updated_profile.owner_id
        try:
            old_profile = await self._profile_repository.get_profile(owner_id)
        except Exception as e:
            # Unreadable current state is handled like a new profile
            logger.warning(
                "Could not load current profile, treating update as new",
                owner_id=owner_id,
                error=str(e),
                exc_info=True,
            )
            old_profile = None

        try:
            saved = await self._profile_repository.update_profile(updated_profile)
        except Exception as e:
            logger.error(
                "Profile update failed",
                owner_id=owner_id,
                error=str(e),
                exc_info=True,
            )
            return ProfileUpdateFailure(
                kind=ProfileUpdateErrorKind.PROFILE_UPDATE_FAILED,
                message=f"Could not store profile for {owner_id}: {e}",
                cause=e,
            )

        changes = self._change_detector.detect_changes(
            old_profile, saved, force=force_goal_recalculation
        )
        logger.info("Profile updated", owner_id=owner_id, changes=changes.summary())

        recalculation: Optional[GoalCalculationResult] = None
        if changes.should_recalculate:
            recalculation = (
                await self._goal_calculation_use_case.recalculate_goals_for_profile_update(
                    owner_id, saved
                )
            )
            if not recalculation.is_success:
                # Profile stays updated; goals catch up on a later calculation
                logger.warning(
                    "Goal recalculation failed after profile update",
                    owner_id=owner_id,
                    kind=recalculation.kind.value,
                )

        await self._notify_trigger(old_profile, saved, recalculation)

        return ProfileUpdateSuccess(
            updated_profile=saved,
            goal_recalculation_result=recalculation,
            changes_summary=changes,
        )

    async def _notify_trigger(
        self,
        old_profile: Optional[UserProfile],
        new_profile: UserProfile,
        recalculation: Optional[GoalCalculationResult],
    ) -> None:
        if self._recalculation_trigger is None:
            return
        try:
            await self._recalculation_trigger.on_profile_updated(
                old_profile, new_profile, recalculation
            )
        except Exception as e:
            logger.error(
                "Recalculation trigger notification failed",
                owner_id=new_profile.owner_id,
                error=str(e),
                exc_info=True,
            )

    async def _mark_in_progress(self, owner_id: str) -> bool:
        async with self._lock:
            if owner_id in self._updates_in_progress:
                return False
            self._updates_in_progress.add(owner_id)
            return True

    async def _clear_in_progress(self, owner_id: str) -> None:
        async with self._lock:
            self._updates_in_progress.discard(owner_id)
