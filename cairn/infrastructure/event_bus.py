"""
Event Bus Infrastructure

Architectural Intent:
- In-process delivery of reconciliation events to async handlers
- A handler subscribed to a base class (e.g. ResourceEvent) receives every
  subclass, so one subscription can follow all outcomes of a run
- Handlers run in subscription order; a failing handler propagates
"""

import logging
from collections import defaultdict

from cairn.domain.events.event_base import DomainEvent
from cairn.domain.ports.event_bus_port import EventHandler

logger = logging.getLogger(__name__)


class EventBus:
    def __init__(self) -> None:
        self._subscriptions: defaultdict[type, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        self._subscriptions[event_type].append(handler)

    def handlers_for(self, event: DomainEvent) -> list[EventHandler]:
        return [
            handler
            for event_type, handlers in self._subscriptions.items()
            if isinstance(event, event_type)
            for handler in handlers
        ]

    async def publish(self, events: list[DomainEvent]) -> None:
        for event in events:
            handlers = self.handlers_for(event)
            logger.debug(
                "%s for %s -> %d handler(s)",
                event.event_type,
                event.aggregate_id,
                len(handlers),
            )
            for handler in handlers:
                await handler(event)
