"""Integration tests: manifest -> composition root -> in-memory Azure."""

import json

import pytest

from cairn.application.dtos.reconcile_dtos import FindResourceRequest, ReconcileRequest
from cairn.composition_root import CairnContainer, create_container, create_gateway
from cairn.domain.entities.reconciliation_pass import PassState
from cairn.domain.events.reconcile_events import ResourceEvent
from cairn.domain.value_objects.cloud_records import ResourceGroupRecord
from cairn.infrastructure.adapters.azure_gateway import AzureCloudGateway
from cairn.infrastructure.adapters.in_memory_gateway import InMemoryCloudGateway
from cairn.infrastructure.config import AzureConfig, CairnConfig, ClusterConfig
from cairn.infrastructure.manifest_loader import load_manifest

MANIFEST = {
    "resourceGroups": [
        {"name": "rg", "tags": {"team": "storage"}},
        {"name": "network", "shared": True},
    ],
    "disks": [
        {
            "name": "etcd-main",
            "resourceGroup": "rg",
            "sizeGB": 20,
            "volumeType": "Premium_LRS",
            "zones": ["1"],
            "tags": {"k8s.io_etcd_main": "1/1"},
        },
        {"name": "scratch", "resourceGroup": "rg", "sizeGB": 8, "lifecycle": "Ignore"},
    ],
}


def _simulated_config():
    return CairnConfig(
        cluster=ClusterConfig(name="prod.example.com"),
        azure=AzureConfig(location="westeurope", simulate=True),
    )


def _request(tmp_path, dry_run=False, data=MANIFEST):
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(data))
    manifest = load_manifest(str(path))
    return ReconcileRequest(
        resource_groups=manifest.resource_groups, disks=manifest.disks, dry_run=dry_run
    )


class TestCompositionRoot:
    def test_simulated_container(self):
        container = create_container(_simulated_config())
        assert isinstance(container, CairnContainer)
        assert isinstance(container.gateway, InMemoryCloudGateway)
        assert container.context.cluster_name == "prod.example.com"
        assert container.context.location == "westeurope"
        assert container.exporter.initialized is False

    def test_azure_gateway_selected(self):
        gateway = create_gateway(CairnConfig(azure=AzureConfig(subscription_id="sub")))
        assert isinstance(gateway, AzureCloudGateway)
        assert gateway.subscription_id == "sub"

    def test_azure_requires_subscription(self):
        with pytest.raises(ValueError, match="subscription_id is required"):
            create_container(CairnConfig())

    def test_injected_gateway(self, gateway):
        container = create_container(CairnConfig(), gateway=gateway)
        assert container.gateway is gateway
        assert container.context.cluster_name == "cairn"


class TestReconcileFlow:
    @pytest.mark.asyncio
    async def test_apply_manifest(self, tmp_path):
        container = create_container(_simulated_config())
        gateway = container.gateway
        await gateway.create_or_update_resource_group(
            "network",
            ResourceGroupRecord(
                name="network", location="westeurope", tags={"owner": "netops"}
            ),
        )
        seen = []

        async def on_event(event):
            seen.append(event.event_type)

        container.event_bus.subscribe(ResourceEvent, on_event)

        response = await container.reconcile.execute(_request(tmp_path))

        states = {o.name: o.state for o in response.outcomes}
        assert states == {
            "rg": PassState.APPLIED,
            "network": PassState.UNCHANGED,
            "etcd-main": PassState.APPLIED,
            "scratch": PassState.SKIPPED,
        }
        assert response.success
        assert seen.count("ResourceCreatedEvent") == 2

        disk = gateway.disks[("rg", "etcd-main")]
        assert disk.location == "westeurope"
        assert disk.sku == "Premium_LRS"
        assert disk.tags == {
            "k8s.io_etcd_main": "1/1",
            "ClusterName": "prod.example.com",
        }
        assert ("rg", "scratch") not in gateway.disks
        assert gateway.resource_groups["network"].tags == {"owner": "netops"}

    @pytest.mark.asyncio
    async def test_apply_is_idempotent(self, tmp_path):
        container = create_container(_simulated_config())
        data = {"resourceGroups": [{"name": "rg"}], "disks": MANIFEST["disks"]}

        await container.reconcile.execute(_request(tmp_path, data=data))
        second = await container.reconcile.execute(_request(tmp_path, data=data))

        assert [o.state for o in second.outcomes] == [
            PassState.UNCHANGED,
            PassState.UNCHANGED,
            PassState.SKIPPED,
        ]

    @pytest.mark.asyncio
    async def test_plan_then_find(self, tmp_path):
        container = create_container(_simulated_config())
        data = {"resourceGroups": [{"name": "rg"}], "disks": MANIFEST["disks"][:1]}

        planned = await container.reconcile.execute(_request(tmp_path, dry_run=True, data=data))
        assert [o.state for o in planned.outcomes] == [PassState.VALIDATED] * 2

        missing = await container.find.execute(
            FindResourceRequest(kind="disk", name="etcd-main", resource_group="rg")
        )
        assert missing is None

        await container.reconcile.execute(_request(tmp_path, data=data))
        found = await container.find.execute(
            FindResourceRequest(kind="disk", name="etcd-main", resource_group="rg")
        )
        assert found.size_gb == 20
        assert found.zones == ["1"]

    @pytest.mark.asyncio
    async def test_missing_shared_group_rejected(self, tmp_path):
        container = create_container(_simulated_config())
        data = {"resourceGroups": [{"name": "network", "shared": True}]}

        response = await container.reconcile.execute(_request(tmp_path, data=data))

        [outcome] = response.outcomes
        assert outcome.state == PassState.REJECTED
        assert "never created" in outcome.message

