"""
Azure Cloud Gateway Adapter

Architectural Intent:
- Implements CloudGatewayPort on top of the Azure SDK for Python
- Managed disks via azure-mgmt-compute, resource groups via
  azure-mgmt-resource, credentials via azure-identity
- Uses the asyncio (`aio`) flavour of every client so reconcilers can await it

Design Decisions:
- SDK models never leave this module: responses become DiskRecord /
  ResourceGroupRecord, requests are built from them
- A 404 (azure.core ResourceNotFoundError) on a read is a normal outcome
  and is returned as None
- Any other AzureError is raised as TransportError chained to the SDK
  error; authentication, retry and polling policy belong to the SDK pipeline
- Clients are created lazily so constructing the adapter needs no network;
  tests inject pre-built clients
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator, Optional

from azure.core.exceptions import AzureError
from azure.core.exceptions import ResourceNotFoundError as AzureResourceNotFoundError
from azure.identity.aio import DefaultAzureCredential
from azure.mgmt.compute.aio import ComputeManagementClient
from azure.mgmt.compute.models import CreationData, Disk as AzureDisk, DiskSku
from azure.mgmt.resource.resources.aio import ResourceManagementClient
from azure.mgmt.resource.resources.models import ResourceGroup as AzureResourceGroup

from cairn.domain.errors import TransportError
from cairn.domain.value_objects.cloud_records import DiskRecord, ResourceGroupRecord

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except AzureError as e:
        status_code = getattr(e, "status_code", None)
        logger.debug("Azure %s failed (status=%s): %s", operation, status_code, e)
        raise TransportError(str(e), operation=operation, status_code=status_code) from e


def _plain(value: Any) -> Any:
    """SDK enums are str subclasses; records hold their plain values."""
    return value.value if isinstance(value, Enum) else value


def disk_record_from_sdk(disk: AzureDisk) -> DiskRecord:
    creation_data = disk.creation_data
    return DiskRecord(
        name=disk.name,
        location=disk.location,
        size_gb=disk.disk_size_gb,
        sku=_plain(disk.sku.name) if disk.sku else None,
        tags=dict(disk.tags or {}),
        zones=tuple(disk.zones or ()),
        id=disk.id,
        create_option=_plain(creation_data.create_option) if creation_data else "",
        provisioning_state=_plain(disk.provisioning_state),
    )


def disk_to_sdk(spec: DiskRecord) -> AzureDisk:
    return AzureDisk(
        location=spec.location,
        creation_data=CreationData(create_option=spec.create_option),
        disk_size_gb=spec.size_gb,
        sku=DiskSku(name=spec.sku) if spec.sku else None,
        zones=list(spec.zones) or None,
        tags=dict(spec.tags),
    )


def resource_group_record_from_sdk(group: AzureResourceGroup) -> ResourceGroupRecord:
    properties = group.properties
    return ResourceGroupRecord(
        name=group.name,
        location=group.location,
        tags=dict(group.tags or {}),
        id=group.id,
        provisioning_state=properties.provisioning_state if properties else None,
    )


class AzureCloudGateway:
    """
    Cloud gateway backed by Azure Resource Manager.

    Configuration parameters
    ------------------------
    subscription_id : str
        Azure subscription GUID all calls are scoped to.
    credential : azure.core.credentials_async.AsyncTokenCredential | None
        Defaults to azure.identity.aio.DefaultAzureCredential().
    compute_client / resource_client
        Pre-built SDK clients; created on first use when omitted.
    """

    def __init__(
        self,
        subscription_id: str,
        credential: Optional[Any] = None,
        compute_client: Optional[Any] = None,
        resource_client: Optional[Any] = None,
    ) -> None:
        if not subscription_id:
            raise ValueError("subscription_id cannot be empty")
        self.subscription_id = subscription_id
        self._credential = credential
        self._compute_client = compute_client
        self._resource_client = resource_client

    def _get_credential(self) -> Any:
        if self._credential is None:
            self._credential = DefaultAzureCredential()
        return self._credential

    @property
    def compute(self) -> Any:
        if self._compute_client is None:
            self._compute_client = ComputeManagementClient(
                self._get_credential(), self.subscription_id
            )
        return self._compute_client

    @property
    def resources(self) -> Any:
        if self._resource_client is None:
            self._resource_client = ResourceManagementClient(
                self._get_credential(), self.subscription_id
            )
        return self._resource_client

    async def close(self) -> None:
        for resource in (self._compute_client, self._resource_client, self._credential):
            if resource is not None:
                await resource.close()

    async def __aenter__(self) -> "AzureCloudGateway":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # CloudGatewayPort implementation
    # ------------------------------------------------------------------

    async def get_disk(self, resource_group: str, name: str) -> Optional[DiskRecord]:
        logger.debug("Azure Disks.get (rg=%s, name=%s)", resource_group, name)
        with _translate_errors("get_disk"):
            try:
                disk = await self.compute.disks.get(
                    resource_group_name=resource_group, disk_name=name
                )
            except AzureResourceNotFoundError:
                return None
        return disk_record_from_sdk(disk)

    async def list_disks(self, resource_group: str) -> list[DiskRecord]:
        logger.debug("Azure Disks.list_by_resource_group (rg=%s)", resource_group)
        records: list[DiskRecord] = []
        with _translate_errors("list_disks"):
            async for disk in self.compute.disks.list_by_resource_group(
                resource_group_name=resource_group
            ):
                records.append(disk_record_from_sdk(disk))
        return records

    async def create_or_update_disk(
        self, resource_group: str, name: str, spec: DiskRecord
    ) -> DiskRecord:
        logger.info(
            "Azure Disks.begin_create_or_update: rg=%s name=%s size=%s sku=%s location=%s",
            resource_group,
            name,
            spec.size_gb,
            spec.sku,
            spec.location,
        )
        with _translate_errors("create_or_update_disk"):
            poller = await self.compute.disks.begin_create_or_update(
                resource_group_name=resource_group,
                disk_name=name,
                disk=disk_to_sdk(spec),
            )
            disk = await poller.result()
        return disk_record_from_sdk(disk)

    async def get_resource_group(self, name: str) -> Optional[ResourceGroupRecord]:
        logger.debug("Azure ResourceGroups.get (name=%s)", name)
        with _translate_errors("get_resource_group"):
            try:
                group = await self.resources.resource_groups.get(resource_group_name=name)
            except AzureResourceNotFoundError:
                return None
        return resource_group_record_from_sdk(group)

    async def create_or_update_resource_group(
        self, name: str, spec: ResourceGroupRecord
    ) -> ResourceGroupRecord:
        logger.info(
            "Azure ResourceGroups.create_or_update: name=%s location=%s",
            name,
            spec.location,
        )
        with _translate_errors("create_or_update_resource_group"):
            group = await self.resources.resource_groups.create_or_update(
                resource_group_name=name,
                parameters=AzureResourceGroup(
                    location=spec.location, tags=dict(spec.tags)
                ),
            )
        return resource_group_record_from_sdk(group)
