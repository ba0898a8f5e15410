"""Unit tests for the in-memory profile and goals repositories.

Note: These are UNIT tests for in-memory implementations.
"""

from datetime import datetime, timedelta, timezone

import pytest

from infrastructure.persistence.in_memory import (
    InMemoryGoalsRepository,
    InMemoryProfileRepository,
)


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def goals_repository() -> InMemoryGoalsRepository:
    return InMemoryGoalsRepository()


class TestInMemoryProfileRepository:
    @pytest.mark.asyncio
    async def test_get_missing_profile(self, profile_repository):
        assert await profile_repository.get_profile("nobody") is None

    @pytest.mark.asyncio
    async def test_update_creates_then_replaces(self, profile_repository, sample_profile):
        stored = await profile_repository.update_profile(sample_profile)
        assert stored == sample_profile

        heavier = sample_profile.with_updates(weight_in_kg=75.0)
        await profile_repository.update_profile(heavier)

        assert (await profile_repository.get_profile("user123")).weight_in_kg == 75.0
        assert profile_repository.count() == 1

    @pytest.mark.asyncio
    async def test_delete_profile(self, profile_repository, sample_profile):
        await profile_repository.update_profile(sample_profile)

        assert await profile_repository.delete_profile("user123") is True
        assert await profile_repository.delete_profile("user123") is False
        assert await profile_repository.get_profile("user123") is None

    @pytest.mark.asyncio
    async def test_clear(self, profile_repository, make_profile):
        await profile_repository.update_profile(make_profile(owner_id="a"))
        await profile_repository.update_profile(make_profile(owner_id="b"))

        profile_repository.clear()

        assert profile_repository.count() == 0


class TestInMemoryGoalsRepository:
    @pytest.mark.asyncio
    async def test_no_goals_initially(self, goals_repository):
        assert await goals_repository.get_current_goals("user123") is None
        assert await goals_repository.get_last_calculation_time("user123") is None

    @pytest.mark.asyncio
    async def test_save_replaces_current(self, goals_repository, make_goals):
        earlier = make_goals(calculated_at=datetime.now(timezone.utc) - timedelta(days=2))
        later = make_goals(steps_goal=9500)

        await goals_repository.save_and_sync_goals(earlier)
        await goals_repository.save_and_sync_goals(later)

        assert await goals_repository.get_current_goals("user123") == later
        assert await goals_repository.get_last_calculation_time("user123") == later.calculated_at
        assert goals_repository.get_goal_history("user123") == [earlier, later]

    @pytest.mark.asyncio
    async def test_repeated_save_is_idempotent(self, goals_repository, make_goals):
        goals = make_goals()

        await goals_repository.save_and_sync_goals(goals)
        await goals_repository.save_and_sync_goals(goals)

        assert goals_repository.get_goal_history("user123") == [goals]
        assert goals_repository.count() == 1

    @pytest.mark.asyncio
    async def test_owners_are_isolated(self, goals_repository, make_goals):
        await goals_repository.save_and_sync_goals(make_goals(owner_id="alice"))

        assert await goals_repository.get_current_goals("bob") is None
        assert goals_repository.get_goal_history("bob") == []

    @pytest.mark.asyncio
    async def test_clear(self, goals_repository, make_goals):
        await goals_repository.save_and_sync_goals(make_goals())

        goals_repository.clear()

        assert goals_repository.count() == 0
        assert goals_repository.get_goal_history("user123") == []
