"""Repository ports - persistence interfaces for profiles and goals."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ..entities.daily_goals import DailyGoals
from ..entities.user_profile import UserProfile


class IProfileRepository(ABC):
    """Port for user profile persistence.

    Implementations raise on storage failure; callers decide whether
    to retry.
    """

    @abstractmethod
    async def get_profile(self, owner_id: str) -> Optional[UserProfile]:
        """Load the stored profile.

        Args:
            owner_id: User identifier

        Returns:
            Optional[UserProfile]: Profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_profile(self, profile: UserProfile) -> UserProfile:
        """Save profile (create or update).

        Args:
            profile: Profile to save

        Returns:
            UserProfile: The stored profile
        """
        pass


class IGoalsRepository(ABC):
    """Port for daily goals persistence and sync.

    save_and_sync_goals must be idempotent per owner: the calculation
    pipeline retries it on failure.
    """

    @abstractmethod
    async def get_current_goals(self, owner_id: str) -> Optional[DailyGoals]:
        """Get the latest goals for an owner, None if never calculated."""
        pass

    @abstractmethod
    async def get_last_calculation_time(self, owner_id: str) -> Optional[datetime]:
        pass

    @abstractmethod
    async def save_and_sync_goals(self, goals: DailyGoals) -> DailyGoals:
        """Store goals, replacing the previous set for the owner.

        Args:
            goals: Goals to store

        Returns:
            DailyGoals: The stored goals
        """
        pass
