"""
Reconciliation Pass Module

Architectural Intent:
- ReconciliationPass records one attempt to converge a remote resource
- State transitions are enforced by domain methods and produce new instances
- Terminal transitions append the domain event describing the outcome

State machine:
    PENDING -> FOUND | NOT_FOUND -> NORMALIZED -> VALIDATED -> APPLIED
    NORMALIZED -> UNCHANGED          (nothing to do)
    PENDING | VALIDATED -> SKIPPED   (lifecycle opted out)
    any non-terminal -> REJECTED     (validation failed)

APPLIED, REJECTED, UNCHANGED and SKIPPED end the pass; a new pass starts
fresh from PENDING. VALIDATED is where a dry run stops.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional

from cairn.domain.entities.resource import ManagedResource
from cairn.domain.events.reconcile_events import (
    ChangeRejectedEvent,
    ResourceCreatedEvent,
    ResourceSkippedEvent,
    ResourceUnchangedEvent,
    ResourceUpdatedEvent,
)


class PassState(Enum):
    PENDING = auto()
    FOUND = auto()
    NOT_FOUND = auto()
    NORMALIZED = auto()
    VALIDATED = auto()
    APPLIED = auto()
    REJECTED = auto()
    UNCHANGED = auto()
    SKIPPED = auto()


TERMINAL_STATES = frozenset(
    {PassState.APPLIED, PassState.REJECTED, PassState.UNCHANGED, PassState.SKIPPED}
)


@dataclass(frozen=True)
class ReconciliationPass:
    kind: str
    name: str
    resource_group: str = ""
    state: PassState = PassState.PENDING
    existed: Optional[bool] = None
    changed_fields: tuple[str, ...] = ()
    message: Optional[str] = None
    domain_events: tuple = ()

    @staticmethod
    def begin(resource: ManagedResource) -> ReconciliationPass:
        return ReconciliationPass(
            kind=resource.KIND,
            name=resource.name or "",
            resource_group=getattr(resource, "resource_group_name", None) or "",
        )

    @property
    def aggregate_id(self) -> str:
        if self.resource_group:
            return f"{self.kind}/{self.resource_group}/{self.name}"
        return f"{self.kind}/{self.name}"

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def succeeded(self) -> bool:
        return self.state in (PassState.APPLIED, PassState.UNCHANGED, PassState.SKIPPED)

    def _require(self, *states: PassState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.name for s in states)
            raise ValueError(
                f"Pass for {self.aggregate_id} must be {allowed}, not {self.state.name}"
            )

    def record_find(self, exists: bool) -> ReconciliationPass:
        self._require(PassState.PENDING)
        return replace(
            self,
            state=PassState.FOUND if exists else PassState.NOT_FOUND,
            existed=exists,
        )

    def normalized(self) -> ReconciliationPass:
        self._require(PassState.FOUND, PassState.NOT_FOUND)
        return replace(self, state=PassState.NORMALIZED)

    def validated(self, changed_fields: list[str]) -> ReconciliationPass:
        self._require(PassState.NORMALIZED)
        return replace(
            self, state=PassState.VALIDATED, changed_fields=tuple(changed_fields)
        )

    def unchanged(self) -> ReconciliationPass:
        self._require(PassState.NORMALIZED)
        return replace(
            self,
            state=PassState.UNCHANGED,
            domain_events=self.domain_events
            + (ResourceUnchangedEvent(
                aggregate_id=self.aggregate_id, kind=self.kind, name=self.name
            ),),
        )

    def applied(self) -> ReconciliationPass:
        self._require(PassState.VALIDATED)
        if self.existed:
            event = ResourceUpdatedEvent(
                aggregate_id=self.aggregate_id,
                kind=self.kind,
                name=self.name,
                changed_fields=self.changed_fields,
            )
        else:
            event = ResourceCreatedEvent(
                aggregate_id=self.aggregate_id, kind=self.kind, name=self.name
            )
        return replace(
            self,
            state=PassState.APPLIED,
            domain_events=self.domain_events + (event,),
        )

    def skipped(self, reason: str) -> ReconciliationPass:
        self._require(PassState.PENDING, PassState.VALIDATED)
        return replace(
            self,
            state=PassState.SKIPPED,
            message=reason,
            domain_events=self.domain_events
            + (ResourceSkippedEvent(
                aggregate_id=self.aggregate_id,
                kind=self.kind,
                name=self.name,
                reason=reason,
            ),),
        )

    def rejected(self, reason: str) -> ReconciliationPass:
        if self.is_terminal:
            raise ValueError(
                f"Pass for {self.aggregate_id} already ended as {self.state.name}"
            )
        return replace(
            self,
            state=PassState.REJECTED,
            message=reason,
            domain_events=self.domain_events
            + (ChangeRejectedEvent(
                aggregate_id=self.aggregate_id,
                kind=self.kind,
                name=self.name,
                reason=reason,
            ),),
        )
