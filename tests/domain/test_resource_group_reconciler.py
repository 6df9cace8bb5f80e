"""Tests for ResourceGroupReconciler."""

import pytest

from cairn.domain.entities.reconciliation_pass import PassState
from cairn.domain.entities.resource_group import ResourceGroup
from cairn.domain.errors import RequiredFieldError, ResourceNotFoundError, TransportError
from cairn.domain.value_objects.cloud_records import ResourceGroupRecord
from cairn.domain.value_objects.lifecycle import Lifecycle


class TestResourceGroupReconciler:
    @pytest.mark.asyncio
    async def test_create_defaults_location(self, resource_group_reconciler, gateway, context):
        desired = ResourceGroup(name="rg")

        recon_pass = await resource_group_reconciler.run(desired, context)

        assert recon_pass.state == PassState.APPLIED
        record = gateway.resource_groups["rg"]
        assert record.location == "eastus"
        assert record.tags == {"ClusterName": "testCluster"}
        assert desired.id == "/subscriptions/00000000-0000-0000-0000-000000000000/resourceGroups/rg"

    @pytest.mark.asyncio
    async def test_explicit_location_kept(self, resource_group_reconciler, gateway, context):
        await resource_group_reconciler.run(
            ResourceGroup(name="rg", location="westeurope"), context
        )
        assert gateway.resource_groups["rg"].location == "westeurope"

    @pytest.mark.asyncio
    async def test_tag_update(self, resource_group_reconciler, gateway, context):
        await resource_group_reconciler.run(ResourceGroup(name="rg"), context)

        recon_pass = await resource_group_reconciler.run(
            ResourceGroup(name="rg", tags={"team": "storage"}), context
        )

        assert recon_pass.state == PassState.APPLIED
        assert recon_pass.changed_fields == ("tags",)
        assert gateway.resource_groups["rg"].tags == {
            "team": "storage",
            "ClusterName": "testCluster",
        }

    @pytest.mark.asyncio
    async def test_unchanged(self, resource_group_reconciler, context):
        await resource_group_reconciler.run(ResourceGroup(name="rg"), context)
        recon_pass = await resource_group_reconciler.run(ResourceGroup(name="rg"), context)
        assert recon_pass.state == PassState.UNCHANGED

    @pytest.mark.asyncio
    async def test_find_requires_name(self, resource_group_reconciler):
        with pytest.raises(RequiredFieldError):
            await resource_group_reconciler.find(ResourceGroup())

    @pytest.mark.asyncio
    async def test_location_conflict_is_transport_error(
        self, resource_group_reconciler, gateway, context
    ):
        await gateway.create_or_update_resource_group(
            "rg", ResourceGroupRecord(name="rg", location="westus")
        )
        with pytest.raises(TransportError) as exc_info:
            await resource_group_reconciler.run(
                ResourceGroup(name="rg", location="eastus"), context
            )
        assert exc_info.value.status_code == 409


class TestSharedResourceGroup:
    @pytest.mark.asyncio
    async def test_missing_shared_group_rejected(
        self, resource_group_reconciler, gateway, context
    ):
        with pytest.raises(ResourceNotFoundError, match="never created") as exc_info:
            await resource_group_reconciler.run(
                ResourceGroup(name="shared-rg", shared=True), context
            )
        assert exc_info.value.reconciliation_pass.state == PassState.REJECTED
        assert gateway.resource_groups == {}

    @pytest.mark.asyncio
    async def test_existing_shared_group_left_untouched(
        self, resource_group_reconciler, gateway, context
    ):
        await gateway.create_or_update_resource_group(
            "shared-rg",
            ResourceGroupRecord(name="shared-rg", location="westus", tags={"owner": "net"}),
        )
        desired = ResourceGroup(name="shared-rg", shared=True, tags={"other": "x"})

        recon_pass = await resource_group_reconciler.run(desired, context)

        assert recon_pass.state == PassState.UNCHANGED
        assert gateway.calls.count("create_or_update_resource_group") == 1
        assert gateway.resource_groups["shared-rg"].tags == {"owner": "net"}
        assert desired.location == "westus"
        assert desired.tags == {"owner": "net"}

    @pytest.mark.asyncio
    async def test_ignored_shared_group(self, resource_group_reconciler, gateway, context):
        recon_pass = await resource_group_reconciler.run(
            ResourceGroup(name="shared-rg", shared=True, lifecycle=Lifecycle.IGNORE),
            context,
        )
        assert recon_pass.state == PassState.SKIPPED
        assert gateway.calls == []
