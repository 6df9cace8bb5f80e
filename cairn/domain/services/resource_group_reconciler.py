"""
Resource Group Reconciler

Architectural Intent:
- Reconciles the Azure resource groups disks live in
- Shared groups are verified to exist and never written to
"""

from __future__ import annotations
import logging
from typing import Optional

from cairn.domain.entities.reconciliation_pass import ReconciliationPass
from cairn.domain.entities.resource_group import ResourceGroup
from cairn.domain.errors import RequiredFieldError, ResourceNotFoundError, ValidationError
from cairn.domain.services.reconciler import Reconciler
from cairn.domain.value_objects.cloud_records import ResourceGroupRecord
from cairn.domain.value_objects.lifecycle import Lifecycle
from cairn.domain.value_objects.reconcile_context import ReconcileContext

logger = logging.getLogger(__name__)


def resource_group_from_record(
    record: ResourceGroupRecord, reference: ResourceGroup
) -> ResourceGroup:
    return ResourceGroup(
        name=record.name,
        lifecycle=reference.lifecycle,
        location=record.location,
        tags=dict(record.tags),
        shared=reference.shared,
        id=record.id,
    )


class ResourceGroupReconciler(Reconciler[ResourceGroup]):

    async def find(self, reference: ResourceGroup) -> Optional[ResourceGroup]:
        if reference.name is None:
            raise RequiredFieldError("Name")

        record = await self._gateway.get_resource_group(reference.name)
        if record is None:
            return None
        return resource_group_from_record(record, reference)

    def _normalize_defaults(
        self, desired: ResourceGroup, context: ReconcileContext
    ) -> None:
        if desired.location is None:
            desired.location = context.location

    async def render(
        self,
        actual: Optional[ResourceGroup],
        expected: ResourceGroup,
        changes: ResourceGroup,
        context: ReconcileContext,
    ) -> ResourceGroup:
        if actual is None:
            logger.info("Creating ResourceGroup %s in %s", expected, expected.location)
        else:
            logger.info(
                "Updating ResourceGroup %s (%s)",
                expected,
                ", ".join(changes.changed_fields()),
            )

        spec = ResourceGroupRecord(
            name=expected.name,
            location=expected.location or context.location,
            tags=dict(expected.tags or {}),
        )
        record = await self._gateway.create_or_update_resource_group(
            expected.name, spec
        )
        return resource_group_from_record(record, expected)

    async def _converge(
        self, desired: ResourceGroup, context: ReconcileContext, dry_run: bool
    ) -> ReconciliationPass:
        if not desired.shared or desired.lifecycle is Lifecycle.IGNORE:
            return await super()._converge(desired, context, dry_run)

        recon_pass = ReconciliationPass.begin(desired)
        try:
            actual = await self.find(desired)
            if actual is None:
                raise ResourceNotFoundError(
                    desired.KIND, desired.name, "shared resource groups are never created"
                )
        except ValidationError as err:
            err.reconciliation_pass = recon_pass.rejected(str(err))
            raise

        logger.debug("Using shared ResourceGroup %s as is", desired)
        self._merge_observed(desired, actual)
        return recon_pass.record_find(True).normalized().unchanged()
