"""In-memory implementation of IProfileRepository."""

from typing import Dict, Optional

from domain.goals.core.entities.user_profile import UserProfile
from domain.goals.core.ports.repository import IProfileRepository


class InMemoryProfileRepository(IProfileRepository):
    """
    In-memory implementation of the profile repository.

    Profiles are immutable, so they are stored and returned as-is.
    Suitable for tests and development; data is lost on restart.
    """

    def __init__(self) -> None:
        self._profiles: Dict[str, UserProfile] = {}

    async def get_profile(self, owner_id: str) -> Optional[UserProfile]:
        return self._profiles.get(owner_id)

    async def update_profile(self, profile: UserProfile) -> UserProfile:
        """
        Create or replace the profile for its owner.

        Args:
            profile: Profile to store

        Returns:
            The stored profile
        """
        self._profiles[profile.owner_id] = profile
        return profile

    async def delete_profile(self, owner_id: str) -> bool:
        return self._profiles.pop(owner_id, None) is not None

    def clear(self) -> None:
        """Clear all profiles (for testing)."""
        self._profiles.clear()

    def count(self) -> int:
        return len(self._profiles)
