"""
Cloud Gateway Port

Architectural Intent:
- Port interface for the cloud control plane reconcilers talk to
- Implemented by the Azure SDK adapter and the in-memory adapter

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- A missing resource is returned as None, never raised
- Every other failure is raised as TransportError; adapters never retry
"""

from typing import Protocol, runtime_checkable, Optional

from cairn.domain.value_objects.cloud_records import DiskRecord, ResourceGroupRecord


@runtime_checkable
class CloudGatewayPort(Protocol):
    """Port for authenticated calls against the cloud control plane."""

    async def get_disk(self, resource_group: str, name: str) -> Optional[DiskRecord]:
        """Fetch a managed disk, or None if it does not exist."""
        ...

    async def list_disks(self, resource_group: str) -> list[DiskRecord]:
        """List the managed disks in a resource group."""
        ...

    async def create_or_update_disk(
        self, resource_group: str, name: str, spec: DiskRecord
    ) -> DiskRecord:
        """Create or update a managed disk and return the server's view of it."""
        ...

    async def get_resource_group(self, name: str) -> Optional[ResourceGroupRecord]:
        """Fetch a resource group, or None if it does not exist."""
        ...

    async def create_or_update_resource_group(
        self, name: str, spec: ResourceGroupRecord
    ) -> ResourceGroupRecord:
        """Create or update a resource group and return the server's view of it."""
        ...
