"""
Disk Descriptor

Architectural Intent:
- Desired or actual state of one Azure managed disk
- References its resource group by name only
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Optional

from cairn.domain.entities.resource import ManagedResource
from cairn.domain.value_objects.disk_storage_account_type import DiskStorageAccountType
from cairn.domain.value_objects.resource_group_ref import ResourceGroupRef


@dataclass
class Disk(ManagedResource):
    KIND: ClassVar[str] = "Disk"

    resource_group: Optional[ResourceGroupRef] = None
    size_gb: Optional[int] = None
    volume_type: Optional[DiskStorageAccountType] = None
    zones: Optional[list[str]] = None

    def __post_init__(self) -> None:
        if self.size_gb is not None and self.size_gb <= 0:
            raise ValueError(f"Disk size must be positive, got {self.size_gb}")

    @property
    def resource_group_name(self) -> Optional[str]:
        return self.resource_group.name if self.resource_group else None

    def __str__(self) -> str:
        return f"{self.resource_group_name or '?'}/{self.name or '?'}"
