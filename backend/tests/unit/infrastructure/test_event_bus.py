"""Unit tests for InMemoryEventBus.

Tests focus on:
- Handler subscription and unsubscription
- Event publishing to handlers in subscription order
- Error handling (failed handlers don't block others)
- Dispatch by event type
"""

from dataclasses import dataclass
from typing import List

import pytest

from domain.goals.core.events.base import DomainEvent
from domain.goals.core.events.goals_recalculated import GoalsRecalculated
from domain.goals.core.value_objects import CalculationSource
from infrastructure.events.in_memory_bus import InMemoryEventBus


@dataclass(frozen=True)
class GoalsReset(DomainEvent):
    """Second event type used to check dispatch by type."""

    owner_id: str


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    """Fixture providing clean InMemoryEventBus."""
    return InMemoryEventBus()


@pytest.fixture
def goals_recalculated() -> GoalsRecalculated:
    return GoalsRecalculated.create(
        owner_id="user123",
        steps_goal=10500,
        calories_goal=2628,
        heart_points_goal=21,
        calculation_source=CalculationSource.STANDARD_FORMULA,
        trigger_reason="Goal-affecting fields changed: weight_in_kg",
    )


@pytest.fixture
def goals_reset() -> GoalsReset:
    return GoalsReset(
        event_id=GoalsReset._generate_event_id(),
        occurred_at=GoalsReset._now(),
        owner_id="user123",
    )


class TestGoalsRecalculatedEvent:
    def test_create_stamps_identity(self, goals_recalculated: GoalsRecalculated) -> None:
        other = GoalsRecalculated.create(
            owner_id="user123",
            steps_goal=10500,
            calories_goal=2628,
            heart_points_goal=21,
            calculation_source=CalculationSource.STANDARD_FORMULA,
            trigger_reason="Manual recalculation",
        )

        assert goals_recalculated.event_id != other.event_id
        assert goals_recalculated.occurred_at.tzinfo is not None


class TestSubscribe:
    """Test subscribe method."""

    def test_init_empty(self, event_bus: InMemoryEventBus) -> None:
        assert event_bus.get_handler_count(GoalsRecalculated) == 0

    def test_subscribe_multiple_handlers_same_event(self, event_bus: InMemoryEventBus) -> None:
        async def handler1(event: GoalsRecalculated) -> None:
            pass

        async def handler2(event: GoalsRecalculated) -> None:
            pass

        event_bus.subscribe(GoalsRecalculated, handler1)
        event_bus.subscribe(GoalsRecalculated, handler2)

        assert event_bus.get_handler_count(GoalsRecalculated) == 2
        assert event_bus.get_handler_count(GoalsReset) == 0


class TestPublish:
    """Test publish method."""

    @pytest.mark.asyncio
    async def test_publish_calls_handler(
        self,
        event_bus: InMemoryEventBus,
        goals_recalculated: GoalsRecalculated,
    ) -> None:
        calls: List[GoalsRecalculated] = []

        async def handler(event: GoalsRecalculated) -> None:
            calls.append(event)

        event_bus.subscribe(GoalsRecalculated, handler)
        await event_bus.publish(goals_recalculated)

        assert calls == [goals_recalculated]

    @pytest.mark.asyncio
    async def test_publish_handler_execution_order(
        self,
        event_bus: InMemoryEventBus,
        goals_recalculated: GoalsRecalculated,
    ) -> None:
        """Test handlers execute in subscription order."""
        execution_order: List[int] = []

        async def handler1(event: GoalsRecalculated) -> None:
            execution_order.append(1)

        async def handler2(event: GoalsRecalculated) -> None:
            execution_order.append(2)

        async def handler3(event: GoalsRecalculated) -> None:
            execution_order.append(3)

        event_bus.subscribe(GoalsRecalculated, handler1)
        event_bus.subscribe(GoalsRecalculated, handler2)
        event_bus.subscribe(GoalsRecalculated, handler3)
        await event_bus.publish(goals_recalculated)

        assert execution_order == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_publish_no_handlers(
        self,
        event_bus: InMemoryEventBus,
        goals_recalculated: GoalsRecalculated,
    ) -> None:
        # Should not raise exception
        await event_bus.publish(goals_recalculated)

    @pytest.mark.asyncio
    async def test_publish_only_matching_event_handlers_called(
        self,
        event_bus: InMemoryEventBus,
        goals_recalculated: GoalsRecalculated,
        goals_reset: GoalsReset,
    ) -> None:
        recalculated_calls: List[GoalsRecalculated] = []
        reset_calls: List[GoalsReset] = []

        async def recalculated_handler(event: GoalsRecalculated) -> None:
            recalculated_calls.append(event)

        async def reset_handler(event: GoalsReset) -> None:
            reset_calls.append(event)

        event_bus.subscribe(GoalsRecalculated, recalculated_handler)
        event_bus.subscribe(GoalsReset, reset_handler)

        await event_bus.publish(goals_reset)

        assert recalculated_calls == []
        assert reset_calls == [goals_reset]

    @pytest.mark.asyncio
    async def test_publish_failed_handler_doesnt_block_others(
        self,
        event_bus: InMemoryEventBus,
        goals_recalculated: GoalsRecalculated,
    ) -> None:
        """Test failed handler doesn't prevent other handlers from executing."""
        calls: List[str] = []

        async def failing_handler(event: GoalsRecalculated) -> None:
            calls.append("failing")
            raise RuntimeError("Handler failed")

        async def succeeding_handler(event: GoalsRecalculated) -> None:
            calls.append("succeeding")

        event_bus.subscribe(GoalsRecalculated, failing_handler)
        event_bus.subscribe(GoalsRecalculated, succeeding_handler)
        await event_bus.publish(goals_recalculated)

        assert calls == ["failing", "succeeding"]


class TestUnsubscribe:
    """Test unsubscribe and clear."""

    @pytest.mark.asyncio
    async def test_unsubscribed_handler_not_called(
        self,
        event_bus: InMemoryEventBus,
        goals_recalculated: GoalsRecalculated,
    ) -> None:
        calls: List[GoalsRecalculated] = []

        async def handler(event: GoalsRecalculated) -> None:
            calls.append(event)

        event_bus.subscribe(GoalsRecalculated, handler)
        assert event_bus.unsubscribe(GoalsRecalculated, handler) is True
        await event_bus.publish(goals_recalculated)

        assert calls == []

    def test_unsubscribe_non_existent_handler(self, event_bus: InMemoryEventBus) -> None:
        async def handler(event: GoalsRecalculated) -> None:
            pass

        assert event_bus.unsubscribe(GoalsRecalculated, handler) is False

    def test_clear_removes_all_handlers(self, event_bus: InMemoryEventBus) -> None:
        async def handler1(event: GoalsRecalculated) -> None:
            pass

        async def handler2(event: GoalsReset) -> None:
            pass

        event_bus.subscribe(GoalsRecalculated, handler1)
        event_bus.subscribe(GoalsReset, handler2)

        event_bus.clear()

        assert event_bus.get_handler_count(GoalsRecalculated) == 0
        assert event_bus.get_handler_count(GoalsReset) == 0
