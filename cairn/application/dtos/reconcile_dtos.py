"""
Reconcile DTOs

Architectural Intent:
- Data Transfer Objects for reconciliation use case boundaries
- Input validation at the application boundary
- Decouples the reported outcome from the domain pass record
"""

from dataclasses import dataclass, field
from typing import Optional

from cairn.domain.entities.disk import Disk
from cairn.domain.entities.reconciliation_pass import PassState, ReconciliationPass
from cairn.domain.entities.resource_group import ResourceGroup

RESOURCE_KINDS = ("disk", "resource-group")


@dataclass(frozen=True)
class ReconcileRequest:
    resource_groups: list[ResourceGroup] = field(default_factory=list)
    disks: list[Disk] = field(default_factory=list)
    dry_run: bool = False

    def __post_init__(self) -> None:
        if not self.resource_groups and not self.disks:
            raise ValueError("nothing to reconcile: no resource groups or disks")


@dataclass(frozen=True)
class ResourceOutcome:
    kind: str
    name: str
    state: PassState
    resource_group: str = ""
    existed: Optional[bool] = None
    changed_fields: tuple[str, ...] = ()
    message: str = ""

    @staticmethod
    def from_pass(recon_pass: ReconciliationPass) -> "ResourceOutcome":
        return ResourceOutcome(
            kind=recon_pass.kind,
            name=recon_pass.name,
            state=recon_pass.state,
            resource_group=recon_pass.resource_group,
            existed=recon_pass.existed,
            changed_fields=recon_pass.changed_fields,
            message=recon_pass.message or "",
        )

    @property
    def label(self) -> str:
        if self.resource_group:
            return f"{self.kind} {self.resource_group}/{self.name}"
        return f"{self.kind} {self.name}"


@dataclass(frozen=True)
class ReconcileResponse:
    outcomes: tuple[ResourceOutcome, ...]
    dry_run: bool = False

    @property
    def success(self) -> bool:
        return not self.rejected

    @property
    def rejected(self) -> list[ResourceOutcome]:
        return [o for o in self.outcomes if o.state == PassState.REJECTED]

    def in_state(self, state: PassState) -> list[ResourceOutcome]:
        return [o for o in self.outcomes if o.state == state]


@dataclass(frozen=True)
class FindResourceRequest:
    kind: str
    name: str
    resource_group: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in RESOURCE_KINDS:
            raise ValueError(f"kind must be one of {', '.join(RESOURCE_KINDS)}")
        if not self.name:
            raise ValueError("name cannot be empty")
        if self.kind == "disk" and not self.resource_group:
            raise ValueError("resource_group is required for disks")
