"""
Domain Events Module

Architectural Intent:
- Base class for events describing what happened to a managed resource
- Events are immutable, timestamped at creation, and keyed by aggregate id
- Collected on a ReconciliationPass and dispatched by the use case
"""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class DomainEvent:
    occurred_at: datetime = field(default_factory=_now, init=False, repr=False, compare=False)
    aggregate_id: str = ""

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation; subclasses add their own fields."""
        return {
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }
