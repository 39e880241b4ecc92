from .dispatcher import DomainEventDispatcher, EventHandler, build_event_dispatcher

__all__ = ['DomainEventDispatcher', 'EventHandler', 'build_event_dispatcher']
