"""Global test configuration.

Shared fixtures for an in-memory Azure backend and a reconcile context.
"""

import pytest

from cairn.domain.services.disk_reconciler import DiskReconciler
from cairn.domain.services.resource_group_reconciler import ResourceGroupReconciler
from cairn.domain.value_objects.reconcile_context import ReconcileContext
from cairn.infrastructure.adapters.in_memory_gateway import InMemoryCloudGateway


@pytest.fixture
def gateway():
    return InMemoryCloudGateway(location="eastus")


@pytest.fixture
def context():
    return ReconcileContext(cluster_name="testCluster", location="eastus")


@pytest.fixture
def disk_reconciler(gateway):
    return DiskReconciler(gateway)


@pytest.fixture
def resource_group_reconciler(gateway):
    return ResourceGroupReconciler(gateway)
