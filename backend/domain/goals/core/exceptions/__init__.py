"""Domain exceptions for daily goals."""

from .domain_errors import (
    GoalCalculationError,
    GoalsDomainError,
    GoalValidationError,
    InvalidGoalInputError,
    ProfileNotFoundError,
)

__all__ = [
    "GoalsDomainError",
    "InvalidGoalInputError",
    "GoalCalculationError",
    "GoalValidationError",
    "ProfileNotFoundError",
]
