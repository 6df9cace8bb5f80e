"""
Disk Reconciler

Architectural Intent:
- Reconciles Azure managed disks through the cloud gateway
- Translates between Disk descriptors and DiskRecord gateway payloads
"""

from __future__ import annotations
import logging
from typing import Optional

from cairn.domain.entities.disk import Disk
from cairn.domain.errors import RequiredFieldError
from cairn.domain.services.reconciler import Reconciler
from cairn.domain.value_objects.cloud_records import (
    DISK_CREATE_OPTION_EMPTY,
    DiskRecord,
)
from cairn.domain.value_objects.disk_storage_account_type import DiskStorageAccountType
from cairn.domain.value_objects.reconcile_context import ReconcileContext
from cairn.domain.value_objects.resource_group_ref import ResourceGroupRef

logger = logging.getLogger(__name__)


def disk_from_record(record: DiskRecord, reference: Disk) -> Disk:
    """Build an actual Disk from what the gateway reported."""
    return Disk(
        name=record.name,
        lifecycle=reference.lifecycle,
        resource_group=ResourceGroupRef(reference.resource_group_name),
        size_gb=record.size_gb,
        volume_type=DiskStorageAccountType(record.sku) if record.sku else None,
        zones=list(record.zones),
        tags=dict(record.tags),
        id=record.id,
    )


class DiskReconciler(Reconciler[Disk]):

    async def find(self, reference: Disk) -> Optional[Disk]:
        if reference.name is None:
            raise RequiredFieldError("Name")
        if reference.resource_group is None:
            raise RequiredFieldError("ResourceGroup")

        record = await self._gateway.get_disk(
            reference.resource_group.name, reference.name
        )
        if record is None:
            logger.debug("Disk %s not found", reference)
            return None
        return disk_from_record(record, reference)

    async def find_all(self, resource_group: str) -> list[Disk]:
        """Every disk in `resource_group`, as actual descriptors."""
        records = await self._gateway.list_disks(resource_group)
        return [
            disk_from_record(
                record, Disk(name=record.name, resource_group=ResourceGroupRef(resource_group))
            )
            for record in records
        ]

    async def render(
        self,
        actual: Optional[Disk],
        expected: Disk,
        changes: Disk,
        context: ReconcileContext,
    ) -> Disk:
        if actual is None:
            logger.info("Creating Disk %s", expected)
        else:
            logger.info(
                "Updating Disk %s (%s)", expected, ", ".join(changes.changed_fields())
            )

        spec = DiskRecord(
            name=expected.name,
            location=context.location,
            size_gb=expected.size_gb,
            sku=expected.volume_type.value if expected.volume_type else None,
            tags=dict(expected.tags or {}),
            zones=tuple(expected.zones or ()),
            create_option=DISK_CREATE_OPTION_EMPTY,
        )
        record = await self._gateway.create_or_update_disk(
            expected.resource_group.name, expected.name, spec
        )
        return disk_from_record(record, expected)
