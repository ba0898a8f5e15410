"""
Scheduler infrastructure for debounced goal recalculation.
"""

from .goal_recalculation_trigger import (
    CalculationTriggerEvent,
    GoalRecalculationTriggerService,
    RecalculationState,
)
from .scheduler_config import DebounceScheduler

__all__ = [
    "CalculationTriggerEvent",
    "DebounceScheduler",
    "GoalRecalculationTriggerService",
    "RecalculationState",
]
