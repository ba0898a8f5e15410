"""End-to-end tests of the wired goals engine with in-memory adapters."""

import asyncio

import pytest

from application.goals.commands.update_profile import ProfileUpdateErrorKind
from domain.goals.core.events.goals_recalculated import GoalsRecalculated
from domain.goals.core.value_objects import STANDARD_BOUNDS, CalculationSource
from infrastructure.config import GoalEngineSettings
from infrastructure.goal_engine_factory import (
    create_goal_engine,
    get_goal_engine,
    reset_goal_engine,
)
from infrastructure.persistence.in_memory import (
    InMemoryGoalsRepository,
    InMemoryProfileRepository,
)
from infrastructure.scheduler.goal_recalculation_trigger import REASON_DURING_UPDATE

FAST_SETTINGS = GoalEngineSettings(
    retry_initial_delay_seconds=0,
    retry_max_delay_seconds=0,
    debounce_seconds=0.05,
)


@pytest.fixture
def engine():
    engine = create_goal_engine(FAST_SETTINGS)
    yield engine
    engine.recalculation_trigger._scheduler.shutdown()


@pytest.fixture
def published(engine) -> list:
    events: list = []

    async def collect(event: GoalsRecalculated) -> None:
        events.append(event)

    engine.event_bus.subscribe(GoalsRecalculated, collect)
    return events


class TestGoalEngineWiring:
    def test_defaults_to_in_memory_adapters(self, engine):
        assert isinstance(engine.profile_repository, InMemoryProfileRepository)
        assert isinstance(engine.goals_repository, InMemoryGoalsRepository)
        assert engine.settings is FAST_SETTINGS

    def test_injected_repositories_are_used(self):
        profiles = InMemoryProfileRepository()
        goals = InMemoryGoalsRepository()

        engine = create_goal_engine(
            FAST_SETTINGS, profile_repository=profiles, goals_repository=goals
        )

        assert engine.profile_repository is profiles
        assert engine.goals_repository is goals

    def test_singleton(self, monkeypatch):
        monkeypatch.setenv("GOALS_LOG_LEVEL", "WARNING")

        first = get_goal_engine()

        assert get_goal_engine() is first
        assert first.settings.log_level == "WARNING"

        reset_goal_engine()
        assert get_goal_engine() is not first


class TestGoalEngineFlows:
    @pytest.mark.asyncio
    async def test_new_profile_gets_standard_goals(self, engine, sample_profile, published):
        result = await engine.profile_update.update_profile_with_goal_recalculation(
            sample_profile
        )

        assert result.is_success
        assert result.changes_summary.is_new_profile
        assert result.goals_recalculated

        stored = await engine.goals_repository.get_current_goals("user123")
        expected = engine.calculation_service.calculate_goals(sample_profile)
        assert stored.calculation_source == CalculationSource.STANDARD_FORMULA
        assert (stored.steps_goal, stored.calories_goal, stored.heart_points_goal) == (
            expected.steps_goal,
            expected.calories_goal,
            expected.heart_points_goal,
        )
        assert STANDARD_BOUNDS.contains(stored)

        assert [event.trigger_reason for event in published] == [REASON_DURING_UPDATE]

    @pytest.mark.asyncio
    async def test_fresh_goals_reused(self, engine, sample_profile):
        await engine.profile_update.update_profile_with_goal_recalculation(sample_profile)
        stored = await engine.goals_repository.get_current_goals("user123")

        result = await engine.goal_calculation.calculate_and_store_goals("user123")

        assert result.is_success
        assert not result.was_recalculated
        assert result.goals == stored

    @pytest.mark.asyncio
    async def test_weight_change_updates_calories(self, engine, sample_profile):
        await engine.profile_update.update_profile_with_goal_recalculation(sample_profile)
        before = await engine.goals_repository.get_current_goals("user123")

        result = await engine.profile_update.update_profile_partially(
            "user123", {"weight_in_kg": 95.0}
        )

        after = await engine.goals_repository.get_current_goals("user123")
        assert result.goals_recalculated
        assert after.calories_goal > before.calories_goal
        assert len(engine.goals_repository.get_goal_history("user123")) == 2

    @pytest.mark.asyncio
    async def test_incomplete_profile_gets_fallback_goals(self, engine, make_profile):
        """Profile without birthday is stored and still gets fallback goals."""
        profile = make_profile(owner_id="newbie", birthday=None)

        result = await engine.profile_update.update_profile_with_goal_recalculation(profile)

        assert result.is_success
        goals = await engine.goals_repository.get_current_goals("newbie")
        assert goals.calculation_source == CalculationSource.FALLBACK_DEFAULT
        assert goals.is_valid()

    @pytest.mark.asyncio
    async def test_profile_not_found(self, engine):
        result = await engine.goal_calculation.calculate_and_store_goals("ghost")

        assert not result.is_success
        assert result.kind.value == "profile_not_found"

        update = await engine.profile_update.update_profile_partially(
            "ghost", {"weight_in_kg": 80.0}
        )
        assert update.kind == ProfileUpdateErrorKind.PROFILE_NOT_FOUND

    @pytest.mark.asyncio
    async def test_manual_recalculation(self, engine, sample_profile, published):
        await engine.profile_repository.update_profile(sample_profile)

        result = await engine.recalculation_trigger.trigger_manual_recalculation("user123")

        assert result.is_success
        assert result.was_recalculated
        assert len(engine.recalculation_trigger.get_calculation_history("user123")) == 1
        assert len(published) == 1

    @pytest.mark.asyncio
    async def test_direct_recalculation_leaves_nothing_pending(
        self, engine, sample_profile
    ):
        await engine.profile_update.update_profile_with_goal_recalculation(sample_profile)
        await engine.profile_update.update_profile_partially("user123", {"height_in_cm": 182})

        await asyncio.sleep(0.2)

        assert engine.recalculation_trigger.pending_recalculations_count == 0
        assert len(engine.goals_repository.get_goal_history("user123")) == 2

    @pytest.mark.asyncio
    async def test_shutdown(self, engine, sample_profile):
        await engine.profile_update.update_profile_with_goal_recalculation(sample_profile)

        await engine.shutdown()

        assert engine.recalculation_trigger.pending_recalculations_count == 0
