"""
List Disks Use Case

Architectural Intent:
- Reports the actual state of every disk in one resource group
- Read-only; nothing is normalized or reconciled
"""

import logging

from cairn.domain.entities.disk import Disk
from cairn.domain.services.disk_reconciler import DiskReconciler

logger = logging.getLogger(__name__)


class ListDisks:
    def __init__(self, disk_reconciler: DiskReconciler):
        self.disk_reconciler = disk_reconciler

    async def execute(self, resource_group: str) -> list[Disk]:
        if not resource_group:
            raise ValueError("resource_group cannot be empty")
        disks = await self.disk_reconciler.find_all(resource_group)
        logger.info("Found %d disk(s) in %s", len(disks), resource_group)
        return sorted(disks, key=lambda d: d.name or "")
