"""
Domain event dispatcher.

Subscribers are plain callables registered per event class. Publishing walks
the event's MRO so a subscriber to a base class (e.g. ``InventoryRequest``)
also receives its subclasses.
"""
import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Tuple, Type

from django.conf import settings
from django.db import transaction
from django.utils.module_loading import import_string

from shared.domain import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class DomainEventDispatcher:
    """In-process publish/subscribe for domain events."""

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Register a handler for an event class and its subclasses."""
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)

    def handlers_for(self, event: DomainEvent) -> List[EventHandler]:
        handlers = []
        for cls in type(event).__mro__:
            for handler in self._handlers.get(cls, []):
                if handler not in handlers:
                    handlers.append(handler)
        return handlers

    def publish(self, events: Iterable[DomainEvent]) -> List[Tuple[DomainEvent, Exception]]:
        """
        Deliver events to their handlers in order.

        A failing handler is logged and skipped; the failures are returned so
        callers can inspect them. Nothing is re-raised because the write that
        produced the events has already committed.
        """
        failures = []
        for event in events:
            for handler in self.handlers_for(event):
                try:
                    handler(event)
                except Exception as e:
                    logger.error(
                        f"Handler {getattr(handler, '__name__', handler)!s} failed for "
                        f"{event.event_type} {event.event_id}: {e}",
                        exc_info=True,
                    )
                    failures.append((event, e))
        return failures

    def publish_on_commit(self, events: List[DomainEvent]) -> None:
        """Publish once the current database transaction commits."""
        if not events:
            return
        transaction.on_commit(lambda: self.publish(events))


def build_event_dispatcher(subscriber_paths: Iterable[str] = None) -> DomainEventDispatcher:
    """
    Create a dispatcher and let each configured module register its handlers.

    ``subscriber_paths`` defaults to ``settings.DOMAIN_EVENT_SUBSCRIBERS``, a
    list of dotted paths to ``register(dispatcher)`` callables.
    """
    if subscriber_paths is None:
        subscriber_paths = getattr(settings, 'DOMAIN_EVENT_SUBSCRIBERS', [])
    dispatcher = DomainEventDispatcher()
    for path in subscriber_paths:
        register = import_string(path)
        register(dispatcher)
        logger.debug(f"Registered domain event subscribers from {path}")
    return dispatcher
