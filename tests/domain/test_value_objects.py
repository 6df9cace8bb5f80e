"""Tests for domain value objects."""

import pytest

from cairn.domain.value_objects.cloud_records import DiskRecord, ResourceGroupRecord
from cairn.domain.value_objects.disk_storage_account_type import DiskStorageAccountType
from cairn.domain.value_objects.lifecycle import Lifecycle
from cairn.domain.value_objects.reconcile_context import ReconcileContext
from cairn.domain.value_objects.resource_group_ref import ResourceGroupRef


class TestLifecycle:
    def test_parse_by_value(self):
        assert Lifecycle.parse("ExistsAndValidates") is Lifecycle.EXISTS_AND_VALIDATES

    def test_parse_by_name(self):
        assert Lifecycle.parse("IGNORE") is Lifecycle.IGNORE

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown lifecycle"):
            Lifecycle.parse("Sometimes")

    def test_requires_existing(self):
        assert Lifecycle.EXISTS_AND_VALIDATES.requires_existing
        assert Lifecycle.EXISTS_AND_WARN_IF_CHANGES.requires_existing
        assert not Lifecycle.SYNC.requires_existing
        assert not Lifecycle.WARN_IF_INSUFFICIENT_ACCESS.requires_existing


class TestResourceGroupRef:
    def test_valid(self):
        ref = ResourceGroupRef("rg")
        assert ref.name == "rg"
        assert str(ref) == "rg"

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            ResourceGroupRef("")

    def test_equality_by_name(self):
        assert ResourceGroupRef("rg") == ResourceGroupRef("rg")


class TestReconcileContext:
    def test_identity_tags_default_key(self):
        context = ReconcileContext(cluster_name="testCluster", location="eastus")
        assert context.identity_tags == {"ClusterName": "testCluster"}

    def test_custom_tag_key(self):
        context = ReconcileContext("prod", "westeurope", tag_key="kubernetes.io_cluster")
        assert context.identity_tags == {"kubernetes.io_cluster": "prod"}

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"cluster_name": "", "location": "eastus"},
            {"cluster_name": "c", "location": ""},
            {"cluster_name": "c", "location": "eastus", "tag_key": ""},
        ],
    )
    def test_empty_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            ReconcileContext(**kwargs)

    def test_immutable(self):
        context = ReconcileContext("c", "eastus")
        with pytest.raises(AttributeError):
            context.location = "westus"


class TestDiskStorageAccountType:
    def test_values_match_azure_sku_names(self):
        assert DiskStorageAccountType("StandardSSD_LRS") is DiskStorageAccountType.STANDARD_SSD_LRS
        assert str(DiskStorageAccountType.PREMIUM_LRS) == "Premium_LRS"

    def test_unknown_sku(self):
        with pytest.raises(ValueError):
            DiskStorageAccountType("Floppy_LRS")


class TestCloudRecords:
    def test_disk_record_defaults(self):
        record = DiskRecord(name="disk", location="eastus")
        assert record.create_option == "Empty"
        assert record.tags == {}
        assert record.zones == ()

    def test_resource_group_record_defaults(self):
        record = ResourceGroupRecord(name="rg", location="eastus")
        assert record.id is None
        assert record.tags == {}
