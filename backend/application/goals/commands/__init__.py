"""Goal use cases (commands)."""

from .calculate_goals import (
    GoalCalculationErrorKind,
    GoalCalculationFailure,
    GoalCalculationResult,
    GoalCalculationSuccess,
    GoalCalculationUseCase,
)
from .update_profile import (
    ProfilePatch,
    ProfileUpdateErrorKind,
    ProfileUpdateFailure,
    ProfileUpdateResult,
    ProfileUpdateSuccess,
    ProfileUpdateUseCase,
)

__all__ = [
    "GoalCalculationErrorKind",
    "GoalCalculationFailure",
    "GoalCalculationResult",
    "GoalCalculationSuccess",
    "GoalCalculationUseCase",
    "ProfilePatch",
    "ProfileUpdateErrorKind",
    "ProfileUpdateFailure",
    "ProfileUpdateResult",
    "ProfileUpdateSuccess",
    "ProfileUpdateUseCase",
]
