"""
Reconcile Resources Use Case

Architectural Intent:
- Orchestrates reconciliation passes over a desired state
- Resource groups converge before the disks that live in them
- Each pass is traced, its events published, its outcome counted

Failure policy:
- A rejected change set is recorded and the run moves on to the next resource
- A gateway failure aborts the run and propagates to the caller
"""

import logging
from typing import Optional

from opentelemetry import trace

from cairn.application.dtos.reconcile_dtos import (
    ReconcileRequest,
    ReconcileResponse,
    ResourceOutcome,
)
from cairn.domain.entities.reconciliation_pass import ReconciliationPass
from cairn.domain.entities.resource import ManagedResource
from cairn.domain.errors import TransportError, ValidationError
from cairn.domain.ports.event_bus_port import EventBusPort
from cairn.domain.services.disk_reconciler import DiskReconciler
from cairn.domain.services.reconciler import Reconciler
from cairn.domain.services.resource_group_reconciler import ResourceGroupReconciler
from cairn.domain.value_objects.reconcile_context import ReconcileContext
from cairn.infrastructure.telemetry.otel_exporter import OTELExporter

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class ReconcileResources:
    def __init__(
        self,
        resource_group_reconciler: ResourceGroupReconciler,
        disk_reconciler: DiskReconciler,
        event_bus: EventBusPort,
        context: ReconcileContext,
        exporter: Optional[OTELExporter] = None,
    ):
        self.resource_group_reconciler = resource_group_reconciler
        self.disk_reconciler = disk_reconciler
        self.event_bus = event_bus
        self.context = context
        self.exporter = exporter

    async def execute(self, request: ReconcileRequest) -> ReconcileResponse:
        outcomes: list[ResourceOutcome] = []
        stages = (
            (self.resource_group_reconciler, request.resource_groups),
            (self.disk_reconciler, request.disks),
        )
        for reconciler, resources in stages:
            for resource in resources:
                outcome = await self._reconcile_one(reconciler, resource, request.dry_run)
                outcomes.append(outcome)

        response = ReconcileResponse(outcomes=tuple(outcomes), dry_run=request.dry_run)
        logger.info(
            "Reconciled %d resource(s), %d rejected%s",
            len(outcomes),
            len(response.rejected),
            " (dry run)" if request.dry_run else "",
        )
        return response

    async def _reconcile_one(
        self,
        reconciler: Reconciler,
        resource: ManagedResource,
        dry_run: bool,
    ) -> ResourceOutcome:
        with tracer.start_as_current_span(
            f"cairn.reconcile.{resource.KIND.lower()}",
            attributes={
                "cairn.resource.name": resource.name or "",
                "cairn.dry_run": dry_run,
            },
        ) as span:
            try:
                if dry_run:
                    recon_pass = await reconciler.plan(resource, self.context)
                else:
                    recon_pass = await reconciler.run(resource, self.context)
            except ValidationError as err:
                recon_pass = err.reconciliation_pass or ReconciliationPass.begin(
                    resource
                ).rejected(str(err))
                logger.warning(
                    "Rejected %s %s: %s",
                    resource.KIND,
                    resource,
                    err,
                    extra={"resource": recon_pass.aggregate_id},
                )
            except TransportError as err:
                if self.exporter:
                    self.exporter.record_transport_error(resource.KIND, err.operation)
                raise
            span.set_attribute("cairn.resource.id", recon_pass.aggregate_id)
            span.set_attribute("cairn.pass.state", recon_pass.state.name)

        await self.event_bus.publish(list(recon_pass.domain_events))
        if self.exporter:
            self.exporter.record_reconcile_outcome(recon_pass.kind, recon_pass.state.name)
        return ResourceOutcome.from_pass(recon_pass)
