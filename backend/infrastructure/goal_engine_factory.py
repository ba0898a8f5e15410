"""Factory wiring the goals engine together."""

from dataclasses import dataclass
from typing import Optional

from application.goals.commands.calculate_goals import GoalCalculationUseCase
from application.goals.commands.update_profile import ProfileUpdateUseCase
from application.goals.orchestrators.goal_calculation_service import (
    GoalCalculationService,
)
from domain.goals.calculation.calories_calculator import CaloriesGoalCalculator
from domain.goals.calculation.fallback_generator import FallbackGoalGenerator
from domain.goals.calculation.heart_points_calculator import (
    HeartPointsGoalCalculator,
)
from domain.goals.calculation.steps_calculator import StepsGoalCalculator
from domain.goals.change_detection.profile_change_detector import (
    ProfileChangeDetector,
)
from domain.goals.core.ports.repository import IGoalsRepository, IProfileRepository
from domain.shared.ports.event_bus import IEventBus
from infrastructure.config import GoalEngineSettings
from infrastructure.events.in_memory_bus import InMemoryEventBus
from infrastructure.logging_config import configure_logging
from infrastructure.persistence.in_memory.goals_repository import (
    InMemoryGoalsRepository,
)
from infrastructure.persistence.in_memory.profile_repository import (
    InMemoryProfileRepository,
)
from infrastructure.scheduler.goal_recalculation_trigger import (
    GoalRecalculationTriggerService,
)
from infrastructure.scheduler.scheduler_config import DebounceScheduler


@dataclass(frozen=True)
class GoalEngine:
    """Wired components of the goals engine."""

    settings: GoalEngineSettings
    profile_repository: IProfileRepository
    goals_repository: IGoalsRepository
    event_bus: IEventBus
    calculation_service: GoalCalculationService
    goal_calculation: GoalCalculationUseCase
    profile_update: ProfileUpdateUseCase
    recalculation_trigger: GoalRecalculationTriggerService

    async def shutdown(self) -> None:
        """Cancel pending recalculations and stop the scheduler."""
        await self.recalculation_trigger.shutdown()


# Singleton instance
_goal_engine: Optional[GoalEngine] = None


def create_goal_engine(
    settings: Optional[GoalEngineSettings] = None,
    profile_repository: Optional[IProfileRepository] = None,
    goals_repository: Optional[IGoalsRepository] = None,
    event_bus: Optional[IEventBus] = None,
) -> GoalEngine:
    """
    Build a goals engine.

    Args:
        settings: Engine settings, read from the environment when omitted
        profile_repository: Profile storage, in-memory when omitted
        goals_repository: Goals storage, in-memory when omitted
        event_bus: Event bus for GoalsRecalculated, in-memory when omitted

    Returns:
        GoalEngine with every component wired
    """
    settings = settings or GoalEngineSettings.from_env()
    profile_repository = profile_repository or InMemoryProfileRepository()
    goals_repository = goals_repository or InMemoryGoalsRepository()
    event_bus = event_bus or InMemoryEventBus()

    change_detector = ProfileChangeDetector()
    calculation_service = GoalCalculationService(
        steps_calculator=StepsGoalCalculator(),
        calories_calculator=CaloriesGoalCalculator(),
        heart_points_calculator=HeartPointsGoalCalculator(),
        fallback_generator=FallbackGoalGenerator(),
    )
    goal_calculation = GoalCalculationUseCase(
        profile_repository=profile_repository,
        goals_repository=goals_repository,
        calculation_service=calculation_service,
        retry_policy=settings.retry_policy(),
        freshness_window=settings.freshness_window,
    )
    recalculation_trigger = GoalRecalculationTriggerService(
        goal_calculation_use_case=goal_calculation,
        scheduler=DebounceScheduler(),
        change_detector=change_detector,
        event_bus=event_bus,
        debounce_seconds=settings.debounce_seconds,
        history_size=settings.history_size,
    )
    profile_update = ProfileUpdateUseCase(
        profile_repository=profile_repository,
        goal_calculation_use_case=goal_calculation,
        change_detector=change_detector,
        recalculation_trigger=recalculation_trigger,
    )

    return GoalEngine(
        settings=settings,
        profile_repository=profile_repository,
        goals_repository=goals_repository,
        event_bus=event_bus,
        calculation_service=calculation_service,
        goal_calculation=goal_calculation,
        profile_update=profile_update,
        recalculation_trigger=recalculation_trigger,
    )


def get_goal_engine() -> GoalEngine:
    """
    Get singleton goals engine.

    Lazy initialization on first call: reads environment settings and
    configures logging from them.
    """
    global _goal_engine
    if _goal_engine is None:
        settings = GoalEngineSettings.from_env()
        configure_logging(settings.log_level, settings.log_json)
        _goal_engine = create_goal_engine(settings)
    return _goal_engine


def reset_goal_engine() -> None:
    """
    Reset singleton instance.

    Useful for testing to ensure clean state.
    """
    global _goal_engine
    _goal_engine = None
