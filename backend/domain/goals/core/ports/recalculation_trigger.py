"""Recalculation trigger port - observer of profile updates."""

from typing import Any, Optional, Protocol

from ..entities.user_profile import UserProfile


class IRecalculationTrigger(Protocol):
    """Receives every persisted profile update.

    The updating use case passes the GoalCalculationResult of the
    recalculation it already ran, if any, so the observer does not
    schedule a second one.
    """

    async def on_profile_updated(
        self,
        old_profile: Optional[UserProfile],
        new_profile: UserProfile,
        recalculation_result: Optional[Any] = None,
    ) -> None:
        ...
