"""
Domain Events Package

Architectural Intent:
- Contains domain events emitted by reconciliation passes
- Events are the primary mechanism for cross-boundary communication
"""

from cairn.domain.events.event_base import DomainEvent
from cairn.domain.events.reconcile_events import (
    ResourceEvent,
    ResourceCreatedEvent,
    ResourceUpdatedEvent,
    ResourceUnchangedEvent,
    ResourceSkippedEvent,
    ChangeRejectedEvent,
)

__all__ = [
    "DomainEvent",
    "ResourceEvent",
    "ResourceCreatedEvent",
    "ResourceUpdatedEvent",
    "ResourceUnchangedEvent",
    "ResourceSkippedEvent",
    "ChangeRejectedEvent",
]
