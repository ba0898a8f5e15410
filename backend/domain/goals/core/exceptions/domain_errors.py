"""Domain exceptions for daily goals."""

from typing import Sequence


class GoalsDomainError(Exception):
    """Base exception for goals domain errors."""

    pass


class InvalidGoalInputError(GoalsDomainError):
    """Raised when biometric input is outside the accepted ranges."""

    pass


class GoalCalculationError(GoalsDomainError):
    """Raised when a calculator cannot produce a goal."""

    pass


class GoalValidationError(GoalsDomainError):
    """Raised when calculated goals fall outside domain bounds."""

    def __init__(self, issues: Sequence[str]):
        super().__init__("Goals failed validation: " + "; ".join(issues))
        self.issues = list(issues)


class ProfileNotFoundError(GoalsDomainError):
    """Raised when no profile exists for an owner."""

    def __init__(self, owner_id: str):
        super().__init__(f"Profile not found: {owner_id}")
        self.owner_id = owner_id
