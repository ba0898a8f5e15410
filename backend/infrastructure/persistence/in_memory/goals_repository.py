"""In-memory implementation of IGoalsRepository."""

from datetime import datetime
from typing import Dict, List, Optional

from domain.goals.core.entities.daily_goals import DailyGoals
from domain.goals.core.ports.repository import IGoalsRepository


class InMemoryGoalsRepository(IGoalsRepository):
    """
    In-memory implementation of the goals repository.

    Keeps the current goal set per owner plus every saved set in order.
    Saving is keyed by owner, so repeating a save is idempotent for the
    current goals.
    """

    def __init__(self) -> None:
        self._current: Dict[str, DailyGoals] = {}
        self._history: Dict[str, List[DailyGoals]] = {}

    async def get_current_goals(self, owner_id: str) -> Optional[DailyGoals]:
        return self._current.get(owner_id)

    async def get_last_calculation_time(self, owner_id: str) -> Optional[datetime]:
        goals = self._current.get(owner_id)
        return goals.calculated_at if goals else None

    async def save_and_sync_goals(self, goals: DailyGoals) -> DailyGoals:
        """
        Replace the owner's current goals.

        Args:
            goals: Goals to store

        Returns:
            The stored goals
        """
        history = self._history.setdefault(goals.owner_id, [])
        if not history or history[-1] != goals:
            history.append(goals)
        self._current[goals.owner_id] = goals
        return goals

    def get_goal_history(self, owner_id: str) -> List[DailyGoals]:
        return list(self._history.get(owner_id, []))

    def clear(self) -> None:
        """Clear all goals (for testing)."""
        self._current.clear()
        self._history.clear()

    def count(self) -> int:
        return len(self._current)
