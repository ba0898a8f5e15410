"""
Debounced goal recalculation triggered by profile updates.

Bursts of profile edits for one owner collapse into a single
recalculation that uses the latest profile snapshot.
"""

import asyncio
import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Deque, Dict, List, Optional

import structlog

from application.goals.commands.calculate_goals import (
    GoalCalculationResult,
    GoalCalculationUseCase,
)
from domain.goals.change_detection.profile_change_detector import (
    ProfileChangeDetector,
)
from domain.goals.core.entities.user_profile import UserProfile
from domain.goals.core.events.goals_recalculated import GoalsRecalculated
from domain.shared.ports.event_bus import IEventBus

from .scheduler_config import DebounceScheduler

logger = structlog.get_logger(__name__)

REASON_MANUAL = "Manual recalculation"
REASON_DURING_UPDATE = "Recalculated during profile update"


class RecalculationState(str, Enum):
    """Per-owner trigger state."""

    IDLE = "idle"
    DEBOUNCING = "debouncing"
    CALCULATING = "calculating"


@dataclass(frozen=True)
class CalculationTriggerEvent:
    """
    One entry of the per-owner recalculation history.

    Attributes:
        owner_id: User identifier
        timestamp: When the recalculation finished (UTC)
        trigger_reason: Why it ran
        success: Whether goals were produced
        duration_ms: Time spent calculating
        was_recalculated: False when stored goals were reused
        error_message: Failure message, if any
    """

    owner_id: str
    timestamp: datetime
    trigger_reason: str
    success: bool
    duration_ms: float
    was_recalculated: bool = False
    error_message: Optional[str] = None

    def summary(self) -> str:
        status = "success" if self.success else f"failed ({self.error_message})"
        return (
            f"{self.timestamp.isoformat()} {self.trigger_reason}: {status} "
            f"in {self.duration_ms:.1f}ms"
        )


def _job_id(owner_id: str) -> str:
    return f"goal-recalc:{owner_id}"


class GoalRecalculationTriggerService:
    """
    Observes profile updates and schedules debounced recalculations.

    State per owner: IDLE -> DEBOUNCING -> CALCULATING -> IDLE. A newer
    qualifying change while DEBOUNCING replaces the pending job, so only
    the last snapshot is calculated. A change arriving while CALCULATING
    is held until the running calculations settle, then gets its own
    debounce window. Cancelling a superseded job is normal control flow
    and never reported as an error.

    When the caller already recalculated (ProfileUpdateUseCase passes its
    result), the pending job for that owner is cancelled and nothing new
    is scheduled.
    """

    def __init__(
        self,
        goal_calculation_use_case: GoalCalculationUseCase,
        scheduler: DebounceScheduler,
        change_detector: Optional[ProfileChangeDetector] = None,
        event_bus: Optional[IEventBus] = None,
        debounce_seconds: float = 2.0,
        history_size: int = 10,
    ):
        self._goal_calculation_use_case = goal_calculation_use_case
        self._scheduler = scheduler
        self._change_detector = change_detector or ProfileChangeDetector()
        self._event_bus = event_bus
        self._debounce_seconds = debounce_seconds
        self._history_size = history_size

        self._states: Dict[str, RecalculationState] = {}
        self._pending: Dict[str, tuple[UserProfile, str]] = {}
        self._running: Dict[str, int] = {}
        self._history: Dict[str, Deque[CalculationTriggerEvent]] = {}
        self._lock = asyncio.Lock()

    async def on_profile_updated(
        self,
        old_profile: Optional[UserProfile],
        new_profile: UserProfile,
        recalculation_result: Optional[GoalCalculationResult] = None,
    ) -> None:
        """
        Handle a persisted profile update.

        Args:
            old_profile: Profile before the update, None if new
            new_profile: Profile as stored
            recalculation_result: Result of a recalculation the caller
                already performed for this update
        """
        owner_id = new_profile.owner_id

        if recalculation_result is not None:
            await self._cancel_pending(owner_id)
            self._record(owner_id, REASON_DURING_UPDATE, recalculation_result, 0.0)
            await self._publish(owner_id, REASON_DURING_UPDATE, recalculation_result)
            return

        changes = self._change_detector.detect_changes(old_profile, new_profile)
        if not changes.should_recalculate:
            logger.debug(
                "Profile update does not affect goals",
                owner_id=owner_id,
                reason=changes.reason,
            )
            return

        async with self._lock:
            self._pending[owner_id] = (new_profile, changes.reason)
            # While calculating, the newer snapshot waits for _settle
            if not self._running.get(owner_id):
                self._states[owner_id] = RecalculationState.DEBOUNCING
                self._schedule(owner_id)

        logger.info(
            "Goal recalculation scheduled",
            owner_id=owner_id,
            reason=changes.reason,
            debounce_seconds=self._debounce_seconds,
        )

    async def trigger_manual_recalculation(self, owner_id: str) -> GoalCalculationResult:
        """
        Recalculate immediately, bypassing the debounce window.

        Any pending debounced recalculation for the owner is cancelled.

        Returns:
            GoalCalculationResult of a forced calculation
        """
        async with self._lock:
            self._drop_pending(owner_id)
            self._start_calculation(owner_id)

        started = time.perf_counter()
        try:
            result = await self._goal_calculation_use_case.calculate_and_store_goals(
                owner_id, force_recalculation=True
            )
        finally:
            await self._settle(owner_id)

        self._record(owner_id, REASON_MANUAL, result, _elapsed_ms(started))
        await self._publish(owner_id, REASON_MANUAL, result)
        return result

    def get_calculation_history(self, owner_id: str) -> List[CalculationTriggerEvent]:
        """Recalculation history for an owner, oldest first."""
        return list(self._history.get(owner_id, ()))

    def clear_calculation_history(self, owner_id: Optional[str] = None) -> None:
        if owner_id is None:
            self._history.clear()
        else:
            self._history.pop(owner_id, None)

    def get_state(self, owner_id: str) -> RecalculationState:
        return self._states.get(owner_id, RecalculationState.IDLE)

    @property
    def pending_recalculations_count(self) -> int:
        return len(self._pending)

    async def cancel_all_pending(self) -> int:
        """
        Cancel every pending debounced recalculation.

        Returns:
            int: Number of cancelled recalculations
        """
        owners = list(self._pending)
        for owner_id in owners:
            await self._cancel_pending(owner_id)
        return len(owners)

    async def shutdown(self) -> None:
        await self.cancel_all_pending()
        self._scheduler.shutdown()

    async def _run_debounced(self, owner_id: str) -> None:
        async with self._lock:
            pending = self._pending.pop(owner_id, None)
            if pending is None:
                return
            self._start_calculation(owner_id)

        profile, reason = pending
        started = time.perf_counter()
        try:
            result = await self._goal_calculation_use_case.recalculate_goals_for_profile_update(
                owner_id, profile
            )
        finally:
            await self._settle(owner_id)

        duration_ms = _elapsed_ms(started)
        self._record(owner_id, reason, result, duration_ms)
        if result.is_success:
            logger.info(
                "Debounced goal recalculation completed",
                owner_id=owner_id,
                duration_ms=duration_ms,
            )
        else:
            logger.warning(
                "Debounced goal recalculation failed",
                owner_id=owner_id,
                kind=result.kind.value,
                message=result.message,
            )
        await self._publish(owner_id, reason, result)

    async def _cancel_pending(self, owner_id: str) -> None:
        async with self._lock:
            self._drop_pending(owner_id)

    def _drop_pending(self, owner_id: str) -> None:
        self._pending.pop(owner_id, None)
        if self._scheduler.cancel(_job_id(owner_id)):
            logger.debug("Pending goal recalculation superseded", owner_id=owner_id)
        if self._states.get(owner_id) == RecalculationState.DEBOUNCING:
            self._states[owner_id] = RecalculationState.IDLE

    def _schedule(self, owner_id: str) -> None:
        self._scheduler.schedule(
            _job_id(owner_id),
            self._run_debounced,
            self._debounce_seconds,
            args=[owner_id],
        )

    def _start_calculation(self, owner_id: str) -> None:
        self._running[owner_id] = self._running.get(owner_id, 0) + 1
        self._states[owner_id] = RecalculationState.CALCULATING

    async def _settle(self, owner_id: str) -> None:
        async with self._lock:
            remaining = self._running.get(owner_id, 0) - 1
            if remaining > 0:
                self._running[owner_id] = remaining
                return
            self._running.pop(owner_id, None)

            if owner_id in self._pending:
                # Edits made while calculating start a new debounce window
                self._states[owner_id] = RecalculationState.DEBOUNCING
                if not self._scheduler.has_job(_job_id(owner_id)):
                    self._schedule(owner_id)
            else:
                self._states[owner_id] = RecalculationState.IDLE

    def _record(
        self,
        owner_id: str,
        reason: str,
        result: GoalCalculationResult,
        duration_ms: float,
    ) -> None:
        history = self._history.setdefault(owner_id, deque(maxlen=self._history_size))
        history.append(
            CalculationTriggerEvent(
                owner_id=owner_id,
                timestamp=datetime.now(timezone.utc),
                trigger_reason=reason,
                success=result.is_success,
                duration_ms=duration_ms,
                was_recalculated=result.was_recalculated if result.is_success else False,
                error_message=None if result.is_success else result.message,
            )
        )

    async def _publish(
        self, owner_id: str, reason: str, result: GoalCalculationResult
    ) -> None:
        if self._event_bus is None or not result.is_success or not result.was_recalculated:
            return

        goals = result.goals
        await self._event_bus.publish(
            GoalsRecalculated.create(
                owner_id=owner_id,
                steps_goal=goals.steps_goal,
                calories_goal=goals.calories_goal,
                heart_points_goal=goals.heart_points_goal,
                calculation_source=goals.calculation_source,
                trigger_reason=reason,
            )
        )


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)
