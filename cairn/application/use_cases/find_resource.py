"""
Find Resource Use Case

Architectural Intent:
- Reports the actual state of one managed resource
- Absence is a normal answer (None), not an error
"""

from typing import Optional

from cairn.application.dtos.reconcile_dtos import FindResourceRequest
from cairn.domain.entities.disk import Disk
from cairn.domain.entities.resource import ManagedResource
from cairn.domain.entities.resource_group import ResourceGroup
from cairn.domain.services.disk_reconciler import DiskReconciler
from cairn.domain.services.resource_group_reconciler import ResourceGroupReconciler
from cairn.domain.value_objects.resource_group_ref import ResourceGroupRef


class FindResource:
    def __init__(
        self,
        resource_group_reconciler: ResourceGroupReconciler,
        disk_reconciler: DiskReconciler,
    ):
        self.resource_group_reconciler = resource_group_reconciler
        self.disk_reconciler = disk_reconciler

    async def execute(self, request: FindResourceRequest) -> Optional[ManagedResource]:
        if request.kind == "disk":
            reference = Disk(
                name=request.name,
                resource_group=ResourceGroupRef(request.resource_group),
            )
            return await self.disk_reconciler.find(reference)
        return await self.resource_group_reconciler.find(ResourceGroup(name=request.name))
