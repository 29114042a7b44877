"""
In-process event bus.

Handlers may subscribe to a concrete event class or to a base class;
a published event reaches every handler registered anywhere along its
MRO. Handler failures are logged and counted, never raised into the
request that published the event.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler
from core.metrics import event_handler_failures_total

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus implementation.

    Handlers for one event are awaited concurrently. Each handler
    class is registered at most once per event class.
    """

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: Event class, or a base class to receive all its subclasses
            handler: The handler to call when a matching event is published
        """
        handlers = self._handlers.setdefault(event_type, [])
        if any(type(existing) is type(handler) for existing in handlers):
            return
        handlers.append(handler)
        logger.debug(f"Subscribed {handler.__class__.__name__} to {event_type.__name__}")

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()

    def handlers_for(self, event: DomainEvent) -> List[EventHandler]:
        """Handlers matching the event's class or any of its bases, without repeats."""
        matched: List[EventHandler] = []
        for cls in type(event).__mro__:
            for handler in self._handlers.get(cls, ()):
                if handler not in matched:
                    matched.append(handler)
        return matched

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        handlers = self.handlers_for(event)
        if not handlers:
            logger.debug(f"No handlers registered for {event.event_type}")
            return

        logger.info(
            f"Publishing {event.event_type} to {len(handlers)} handler(s)",
            extra={"event_id": str(event.event_id), "aggregate_id": event.aggregate_id},
        )
        await asyncio.gather(*(self._dispatch(handler, event) for handler in handlers))

    async def _dispatch(self, handler: EventHandler, event: DomainEvent) -> None:
        handler_name = handler.__class__.__name__
        try:
            await handler.handle(event)
        except Exception as e:  # pylint: disable=broad-exception-caught
            event_handler_failures_total.labels(
                event_type=event.event_type, handler=handler_name
            ).inc()
            logger.error(
                f"Error handling {event.event_type} with {handler_name}: {e}",
                extra={"event_id": str(event.event_id)},
                exc_info=True,
            )


event_bus = InMemoryEventBus()
