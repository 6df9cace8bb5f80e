"""
Reconciler Service

Architectural Intent:
- Domain service converging one managed resource to its desired state
- Implements the pass pipeline shared by every resource kind:
  find -> normalize -> diff -> check_changes -> render
- Resource kinds supply find() and render(); everything else is generic

Design Decisions:
- The ambient ReconcileContext is passed in explicitly, never read from
  globals
- check_changes is a pure guard: no side effects, no gateway calls
- Validation failures are raised with the REJECTED pass attached as
  err.reconciliation_pass, before any mutation reaches the gateway
- Gateway errors propagate unmodified; nothing is retried here
"""

from __future__ import annotations
import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import fields
from typing import Generic, Optional, TypeVar

from cairn.domain.entities.reconciliation_pass import ReconciliationPass
from cairn.domain.entities.resource import ManagedResource
from cairn.domain.errors import (
    CannotChangeFieldError,
    RequiredFieldError,
    ResourceNotFoundError,
    TransportError,
    ValidationError,
)
from cairn.domain.ports.cloud_gateway_port import CloudGatewayPort
from cairn.domain.value_objects.lifecycle import Lifecycle
from cairn.domain.value_objects.reconcile_context import ReconcileContext

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=ManagedResource)


class Reconciler(ABC, Generic[R]):
    """
    Converges resources of one kind against the cloud gateway.

    One pass runs strictly sequentially; concurrent passes over the same
    named resource must be serialized by the caller.
    """

    def __init__(self, gateway: CloudGatewayPort):
        self._gateway = gateway

    @abstractmethod
    async def find(self, reference: R) -> Optional[R]:
        """
        Return the actual state of the resource named by `reference`,
        or None if it does not exist.
        """
        ...

    @abstractmethod
    async def render(
        self,
        actual: Optional[R],
        expected: R,
        changes: R,
        context: ReconcileContext,
    ) -> R:
        """Issue the create-or-update call and return the observed state."""
        ...

    def _normalize_defaults(self, desired: R, context: ReconcileContext) -> None:
        """Hook for kind-specific defaults resolved from the context."""

    def normalize(self, desired: R, context: ReconcileContext) -> R:
        """
        Fill in computed defaults on `desired`, in place.

        The cluster identity tag is merged into the tag set; other keys keep
        the caller's values. Normalizing twice changes nothing.
        """
        tags = dict(desired.tags or {})
        tags.update(context.identity_tags)
        desired.tags = tags
        self._normalize_defaults(desired, context)
        return desired

    def check_changes(
        self,
        actual: Optional[R],
        expected: Optional[R],
        changes: Optional[R],
    ) -> None:
        """
        Raise ValidationError if the proposed change is not legal.

        Creating requires a name; an existing resource can never be renamed.
        """
        if actual is None:
            if expected is None or expected.name is None:
                raise RequiredFieldError("Name")
            return
        if changes is not None and changes.name is not None:
            raise CannotChangeFieldError("Name")

    async def plan(self, desired: R, context: ReconcileContext) -> ReconciliationPass:
        """Run the pass up to validation without mutating anything remotely."""
        return await self._converge(desired, context, dry_run=True)

    async def run(self, desired: R, context: ReconcileContext) -> ReconciliationPass:
        """
        Converge the remote resource to `desired`.

        On success the server-observed state is merged back into `desired`.
        """
        return await self._converge(desired, context, dry_run=False)

    async def _converge(
        self, desired: R, context: ReconcileContext, dry_run: bool
    ) -> ReconciliationPass:
        recon_pass = ReconciliationPass.begin(desired)

        if desired.lifecycle is Lifecycle.IGNORE:
            logger.debug("Ignoring %s %s", desired.KIND, desired)
            return recon_pass.skipped("lifecycle is Ignore")

        try:
            try:
                actual = await self.find(desired)
            except TransportError as e:
                if desired.lifecycle is not Lifecycle.WARN_IF_INSUFFICIENT_ACCESS:
                    raise
                logger.warning(
                    "Skipping %s %s, cannot read it: %s", desired.KIND, desired, e
                )
                return recon_pass.skipped(f"insufficient access: {e}")

            recon_pass = recon_pass.record_find(actual is not None)

            self.normalize(desired, context)
            recon_pass = recon_pass.normalized()

            if actual is None and desired.lifecycle.requires_existing:
                raise ResourceNotFoundError(
                    desired.KIND,
                    desired.name,
                    f"lifecycle is {desired.lifecycle.value}",
                )

            changes = desired.build_changes(actual)
            self.check_changes(actual, desired, changes)

            changed = changes.changed_fields()
            if actual is not None and not changed:
                logger.debug("%s %s is up to date", desired.KIND, desired)
                return recon_pass.unchanged()

            if desired.lifecycle is Lifecycle.EXISTS_AND_VALIDATES:
                raise ValidationError(
                    f"{desired.KIND} {desired.name!r} has lifecycle "
                    f"{desired.lifecycle.value} but differs in: {', '.join(changed)}"
                )

            recon_pass = recon_pass.validated(changed)

            if desired.lifecycle is Lifecycle.EXISTS_AND_WARN_IF_CHANGES:
                logger.warning(
                    "%s %s differs in %s; not applying (lifecycle %s)",
                    desired.KIND,
                    desired,
                    ", ".join(changed),
                    desired.lifecycle.value,
                )
                return recon_pass.skipped(f"changes not applied: {', '.join(changed)}")

            if dry_run:
                return recon_pass

            observed = await self.render(actual, desired, changes, context)
            self._merge_observed(desired, observed)
            return recon_pass.applied()

        except ValidationError as err:
            err.reconciliation_pass = recon_pass.rejected(str(err))
            raise

    @staticmethod
    def _merge_observed(desired: R, observed: R) -> None:
        """Copy server-owned values (id, tags) and anything left unset."""
        for f in fields(desired):
            if f.name == "lifecycle":
                continue
            value = getattr(observed, f.name)
            if value is None:
                continue
            if f.name in ("id", "tags") or getattr(desired, f.name) is None:
                setattr(desired, f.name, copy.deepcopy(value))
