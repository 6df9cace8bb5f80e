"""
Reconciliation Events

Published once a pass reaches a terminal state. aggregate_id is
"<Kind>/<resource group>/<name>" (see ReconciliationPass.aggregate_id).
"""

from dataclasses import dataclass, field
from typing import Any

from cairn.domain.events.event_base import DomainEvent


@dataclass(frozen=True)
class ResourceEvent(DomainEvent):
    kind: str = ""
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({"kind": self.kind, "name": self.name})
        return data


@dataclass(frozen=True)
class ResourceCreatedEvent(ResourceEvent):
    pass


@dataclass(frozen=True)
class ResourceUpdatedEvent(ResourceEvent):
    changed_fields: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["changed_fields"] = list(self.changed_fields)
        return data


@dataclass(frozen=True)
class ResourceUnchangedEvent(ResourceEvent):
    pass


@dataclass(frozen=True)
class ResourceSkippedEvent(ResourceEvent):
    reason: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["reason"] = self.reason
        return data


@dataclass(frozen=True)
class ChangeRejectedEvent(ResourceEvent):
    reason: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["reason"] = self.reason
        return data
