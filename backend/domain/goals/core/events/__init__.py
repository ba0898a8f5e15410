"""Domain events for the goals domain."""

from .base import DomainEvent
from .goals_recalculated import GoalsRecalculated

__all__ = ["DomainEvent", "GoalsRecalculated"]
