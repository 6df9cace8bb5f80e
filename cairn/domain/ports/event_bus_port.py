"""
Event Bus Port

Architectural Intent:
- Abstract interface for publishing reconciliation events
- Decouples the reconcile use case from whoever reports on its outcomes
"""

from typing import Awaitable, Callable, Protocol, runtime_checkable

from cairn.domain.events.event_base import DomainEvent

EventHandler = Callable[[DomainEvent], Awaitable[None]]


@runtime_checkable
class EventBusPort(Protocol):
    async def publish(self, events: list[DomainEvent]) -> None:
        """Deliver `events`, in order, to every matching subscriber."""
        ...

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """Receive events that are instances of `event_type`."""
        ...
