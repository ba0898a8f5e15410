"""In-memory event bus implementation.

Implements the IEventBus port for tests and single-process deployments.
"""

from typing import Any, Awaitable, Callable, Dict, List, Type, TypeVar

import structlog

from domain.goals.core.events.base import DomainEvent

logger = structlog.get_logger(__name__)

TEvent = TypeVar("TEvent", bound=DomainEvent)


class InMemoryEventBus:
    """
    In-memory implementation of IEventBus port.

    Handlers are kept per event type and awaited one after another in
    subscription order. A failing handler is logged and the remaining
    handlers still run.

    Example:
        >>> bus = InMemoryEventBus()
        >>>
        >>> async def log_event(event: GoalsRecalculated) -> None:
        ...     print(f"Goals recalculated: {event.owner_id}")
        >>>
        >>> bus.subscribe(GoalsRecalculated, log_event)
        >>> await bus.publish(GoalsRecalculated.create(...))
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[Callable[[Any], Awaitable[None]]]] = {}

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: Callable[[TEvent], Awaitable[None]],
    ) -> None:
        """
        Subscribe a handler to an event type.

        Note:
            Subscribing the same handler twice makes it run twice.
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(
            "Handler subscribed",
            event_type=event_type.__name__,
            handler=getattr(handler, "__name__", repr(handler)),
        )

    async def publish(self, event: TEvent) -> None:
        """
        Publish an event to all subscribed handlers.

        Args:
            event: Domain event to publish
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug("No handlers for event", event_type=event_type.__name__)
            return

        logger.info(
            "Publishing event",
            event_type=event_type.__name__,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    event_type=event_type.__name__,
                    event_id=str(event.event_id),
                    handler=getattr(handler, "__name__", repr(handler)),
                    error=str(e),
                    exc_info=True,
                )

    def unsubscribe(
        self,
        event_type: Type[TEvent],
        handler: Callable[[TEvent], Awaitable[None]],
    ) -> bool:
        """
        Unsubscribe a handler from an event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        handlers = self._handlers.get(event_type)
        if not handlers or handler not in handlers:
            return False

        handlers.remove(handler)
        return True

    def clear(self) -> None:
        """Clear all event subscriptions (for testing)."""
        self._handlers.clear()

    def get_handler_count(self, event_type: Type[TEvent]) -> int:
        return len(self._handlers.get(event_type, []))
