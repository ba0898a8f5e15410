"""Orchestrators coordinating goal calculators."""

from .goal_calculation_service import GoalCalculationService

__all__ = ["GoalCalculationService"]
