"""
In-Memory Cloud Gateway Adapter

Architectural Intent:
- Implements CloudGatewayPort without any Azure credentials
- Plays the role of the Azure Resource Manager backend for tests, plan
  previews and `cairn --simulate`
- Records are shaped like the ARM responses the Azure adapter translates

Design Decisions:
- Registries are keyed the way ARM addresses resources: disks by
  (resource group, name), resource groups by name
- Lookups are case-insensitive on names, as in ARM
- Failures can be injected per operation to exercise TransportError paths
- Every simulated call is logged at DEBUG level
"""

import logging
from dataclasses import replace
from typing import Optional

from cairn.domain.errors import TransportError
from cairn.domain.value_objects.cloud_records import DiskRecord, ResourceGroupRecord

logger = logging.getLogger(__name__)

DEFAULT_SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"


def make_disk_id(subscription_id: str, resource_group: str, name: str) -> str:
    return (
        f"/subscriptions/{subscription_id}/resourceGroups/{resource_group}"
        f"/providers/Microsoft.Compute/disks/{name}"
    )


def make_resource_group_id(subscription_id: str, name: str) -> str:
    return f"/subscriptions/{subscription_id}/resourceGroups/{name}"


class InMemoryCloudGateway:
    """
    Cloud gateway backed by in-process registries.

    Configuration parameters
    ------------------------
    location : str
        Region reported by `location` (e.g. "eastus").
    subscription_id : str
        Subscription GUID used when minting resource ids.
    """

    def __init__(
        self,
        location: str = "eastus",
        subscription_id: str = DEFAULT_SUBSCRIPTION_ID,
    ) -> None:
        self.location = location
        self.subscription_id = subscription_id

        self.disks: dict[tuple[str, str], DiskRecord] = {}
        self.resource_groups: dict[str, ResourceGroupRecord] = {}
        self.calls: list[str] = []
        self._failures: dict[str, TransportError] = {}

        logger.debug(
            "InMemoryCloudGateway initialised (subscription=%s, location=%s)",
            subscription_id,
            location,
        )

    # ------------------------------------------------------------------
    # Failure injection
    # ------------------------------------------------------------------

    def inject_failure(self, operation: str, error: Optional[TransportError] = None) -> None:
        """Make every later call to `operation` raise `error`."""
        self._failures[operation] = error or TransportError(
            f"simulated failure in {operation}", operation=operation, status_code=500
        )

    def clear_failures(self) -> None:
        self._failures.clear()

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self._failures:
            raise self._failures[operation]

    @staticmethod
    def _key(*parts: str) -> tuple[str, ...]:
        return tuple(p.lower() for p in parts)

    # ------------------------------------------------------------------
    # CloudGatewayPort implementation
    # ------------------------------------------------------------------

    async def get_disk(self, resource_group: str, name: str) -> Optional[DiskRecord]:
        self._enter("get_disk")
        logger.debug("Disks.get (rg=%s, name=%s)", resource_group, name)
        return self.disks.get(self._key(resource_group, name))

    async def list_disks(self, resource_group: str) -> list[DiskRecord]:
        self._enter("list_disks")
        logger.debug("Disks.list_by_resource_group (rg=%s)", resource_group)
        rg = resource_group.lower()
        return [disk for (group, _), disk in self.disks.items() if group == rg]

    async def create_or_update_disk(
        self, resource_group: str, name: str, spec: DiskRecord
    ) -> DiskRecord:
        self._enter("create_or_update_disk")
        logger.debug(
            "Disks.begin_create_or_update (rg=%s, name=%s, size=%s, sku=%s)",
            resource_group,
            name,
            spec.size_gb,
            spec.sku,
        )
        key = self._key(resource_group, name)
        existing = self.disks.get(key)
        record = replace(
            spec,
            name=existing.name if existing else name,
            tags=dict(spec.tags),
            id=existing.id if existing else make_disk_id(
                self.subscription_id, resource_group, name
            ),
            provisioning_state="Succeeded",
        )
        self.disks[key] = record
        return record

    async def get_resource_group(self, name: str) -> Optional[ResourceGroupRecord]:
        self._enter("get_resource_group")
        logger.debug("ResourceGroups.get (name=%s)", name)
        return self.resource_groups.get(name.lower())

    async def create_or_update_resource_group(
        self, name: str, spec: ResourceGroupRecord
    ) -> ResourceGroupRecord:
        self._enter("create_or_update_resource_group")
        logger.debug(
            "ResourceGroups.create_or_update (name=%s, location=%s)",
            name,
            spec.location,
        )
        existing = self.resource_groups.get(name.lower())
        if existing is not None and existing.location != spec.location:
            raise TransportError(
                f"InvalidResourceGroupLocation: resource group {name!r} already "
                f"exists in location {existing.location!r}",
                operation="create_or_update_resource_group",
                status_code=409,
            )
        record = replace(
            spec,
            name=existing.name if existing else name,
            tags=dict(spec.tags),
            id=existing.id if existing else make_resource_group_id(
                self.subscription_id, name
            ),
            provisioning_state="Succeeded",
        )
        self.resource_groups[name.lower()] = record
        return record

