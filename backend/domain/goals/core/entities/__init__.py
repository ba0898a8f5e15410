"""Entities for the goals domain."""

from .daily_goals import FRESHNESS_WINDOW, DailyGoals
from .user_profile import UserProfile

__all__ = ["DailyGoals", "FRESHNESS_WINDOW", "UserProfile"]
