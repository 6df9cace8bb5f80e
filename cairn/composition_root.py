"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the cairn application
- Single place where the gateway, reconcilers and use cases are wired together
- No adapter instantiation should occur outside this module (except tests)

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Factory function creates and wires all dependencies from a CairnConfig
- The Azure gateway is chosen unless the config asks to simulate; callers
  may also hand in any CloudGatewayPort directly
"""

from dataclasses import dataclass
from typing import Optional

from cairn.application.use_cases.find_resource import FindResource
from cairn.application.use_cases.list_disks import ListDisks
from cairn.application.use_cases.reconcile_resources import ReconcileResources
from cairn.domain.ports.cloud_gateway_port import CloudGatewayPort
from cairn.domain.services.disk_reconciler import DiskReconciler
from cairn.domain.services.resource_group_reconciler import ResourceGroupReconciler
from cairn.domain.value_objects.reconcile_context import ReconcileContext
from cairn.infrastructure.adapters.azure_gateway import AzureCloudGateway
from cairn.infrastructure.adapters.in_memory_gateway import InMemoryCloudGateway
from cairn.infrastructure.config import CairnConfig
from cairn.infrastructure.event_bus import EventBus
from cairn.infrastructure.telemetry.otel_exporter import OTELExporter, create_exporter


@dataclass
class CairnContainer:
    """DI container holding all wired dependencies."""

    config: CairnConfig
    context: ReconcileContext
    gateway: CloudGatewayPort
    event_bus: EventBus
    exporter: OTELExporter
    resource_group_reconciler: ResourceGroupReconciler
    disk_reconciler: DiskReconciler
    reconcile: ReconcileResources
    find: FindResource
    list_disks: ListDisks

    async def close(self) -> None:
        close = getattr(self.gateway, "close", None)
        if close is not None:
            await close()


def create_gateway(config: CairnConfig) -> CloudGatewayPort:
    if config.azure.simulate:
        return InMemoryCloudGateway(location=config.azure.location)
    if not config.azure.subscription_id:
        raise ValueError(
            "azure.subscription_id is required (set CAIRN_AZURE_SUBSCRIPTION_ID "
            "or use --simulate)"
        )
    return AzureCloudGateway(config.azure.subscription_id)


def create_container(
    config: Optional[CairnConfig] = None,
    gateway: Optional[CloudGatewayPort] = None,
) -> CairnContainer:
    """Create and wire all dependencies."""
    config = config or CairnConfig()
    context = ReconcileContext(
        cluster_name=config.cluster.name,
        location=config.azure.location,
        tag_key=config.cluster.tag_key,
    )
    gateway = gateway or create_gateway(config)
    event_bus = EventBus()
    exporter = create_exporter(
        endpoint=config.telemetry.endpoint,
        service_name=config.telemetry.service_name,
        insecure=config.telemetry.insecure,
    )

    resource_group_reconciler = ResourceGroupReconciler(gateway)
    disk_reconciler = DiskReconciler(gateway)

    reconcile = ReconcileResources(
        resource_group_reconciler, disk_reconciler, event_bus, context, exporter
    )
    find = FindResource(resource_group_reconciler, disk_reconciler)
    list_disks = ListDisks(disk_reconciler)

    return CairnContainer(
        config=config,
        context=context,
        gateway=gateway,
        event_bus=event_bus,
        exporter=exporter,
        resource_group_reconciler=resource_group_reconciler,
        disk_reconciler=disk_reconciler,
        reconcile=reconcile,
        find=find,
        list_disks=list_disks,
    )
