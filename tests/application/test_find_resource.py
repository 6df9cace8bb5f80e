"""Tests for FindResource use case."""

import pytest

from cairn.application.dtos.reconcile_dtos import FindResourceRequest
from cairn.application.use_cases.find_resource import FindResource
from cairn.domain.entities.disk import Disk
from cairn.domain.entities.resource_group import ResourceGroup
from cairn.domain.value_objects.cloud_records import DiskRecord, ResourceGroupRecord


class TestFindResource:
    @pytest.mark.asyncio
    async def test_find_disk(self, resource_group_reconciler, disk_reconciler, gateway):
        await gateway.create_or_update_disk(
            "rg", "disk", DiskRecord(name="disk", location="eastus", size_gb=32)
        )
        use_case = FindResource(resource_group_reconciler, disk_reconciler)

        found = await use_case.execute(
            FindResourceRequest(kind="disk", name="disk", resource_group="rg")
        )

        assert isinstance(found, Disk)
        assert found.size_gb == 32

    @pytest.mark.asyncio
    async def test_find_resource_group(
        self, resource_group_reconciler, disk_reconciler, gateway
    ):
        await gateway.create_or_update_resource_group(
            "rg", ResourceGroupRecord(name="rg", location="westus")
        )
        use_case = FindResource(resource_group_reconciler, disk_reconciler)

        found = await use_case.execute(FindResourceRequest(kind="resource-group", name="rg"))

        assert isinstance(found, ResourceGroup)
        assert found.location == "westus"

    @pytest.mark.asyncio
    async def test_not_found(self, resource_group_reconciler, disk_reconciler):
        use_case = FindResource(resource_group_reconciler, disk_reconciler)
        result = await use_case.execute(
            FindResourceRequest(kind="disk", name="nope", resource_group="rg")
        )
        assert result is None


class TestFindResourceRequest:
    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="kind must be one of"):
            FindResourceRequest(kind="vm", name="x")

    def test_empty_name(self):
        with pytest.raises(ValueError, match="name cannot be empty"):
            FindResourceRequest(kind="resource-group", name="")

    def test_disk_needs_group(self):
        with pytest.raises(ValueError, match="resource_group is required"):
            FindResourceRequest(kind="disk", name="disk")
