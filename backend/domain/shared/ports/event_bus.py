"""Event bus port (interface).

The domain defines the contract; infrastructure provides the adapter.
"""

from typing import Awaitable, Callable, Protocol, Type, TypeVar

from domain.goals.core.events.base import DomainEvent

TEvent = TypeVar("TEvent", bound=DomainEvent)

# Event handler type: async function that takes an event and returns None
EventHandler = Callable[[TEvent], Awaitable[None]]


class IEventBus(Protocol):
    """
    Interface for event publishing and subscription.

    Example usage (application layer):
        >>> async def on_goals_recalculated(event: GoalsRecalculated) -> None:
        ...     print(f"New goals for {event.owner_id}")
        ...
        >>> event_bus.subscribe(GoalsRecalculated, on_goals_recalculated)
        >>> await event_bus.publish(GoalsRecalculated.create(...))
    """

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: Type of event to listen for (e.g., GoalsRecalculated)
            handler: Async function to call when event is published
        """
        ...

    async def publish(self, event: TEvent) -> None:
        """
        Publish an event to all subscribed handlers.

        Note:
            - Handlers are called in subscription order
            - A failing handler does not stop the others
        """
        ...

    def unsubscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> bool:
        """
        Unsubscribe a handler from an event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        ...

    def clear(self) -> None:
        """Clear all event subscriptions."""
        ...
