"""
Managed Resource Module

Architectural Intent:
- Base descriptor for every resource kind cairn reconciles
- A descriptor is plain data: desired (from a manifest) or actual (from find)
- The only behaviour is the diff against another descriptor of the same kind

Design Decisions:
- Every configurable field is Optional: None means "unset, inherit or compute",
  never "explicitly zero"
- lifecycle and id are bookkeeping, not configuration, and are never diffed
- A change set is a descriptor of the same kind with only the differing
  fields set
"""

from __future__ import annotations
import copy
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Optional, Self

from cairn.domain.value_objects.lifecycle import Lifecycle
from cairn.domain.value_objects.resource_group_ref import ResourceGroupRef


@dataclass
class ManagedResource:
    KIND: ClassVar[str] = "Resource"
    UNDIFFED_FIELDS: ClassVar[frozenset[str]] = frozenset({"lifecycle", "id"})

    name: Optional[str] = None
    lifecycle: Lifecycle = Lifecycle.SYNC
    tags: Optional[dict[str, str]] = None
    id: Optional[str] = None

    def _diffed_fields(self) -> list[str]:
        return [f.name for f in fields(self) if f.name not in self.UNDIFFED_FIELDS]

    def build_changes(self, actual: Optional[Self]) -> Self:
        """
        Compute the change set that converges `actual` to this descriptor.

        With no actual resource everything desired is a change.
        """
        if actual is None:
            return copy.deepcopy(self)

        changes = type(self)(lifecycle=self.lifecycle)
        for name in self._diffed_fields():
            desired = getattr(self, name)
            if desired is None:
                continue
            if desired != getattr(actual, name):
                setattr(changes, name, copy.deepcopy(desired))
        return changes

    def changed_fields(self) -> list[str]:
        """Names of the fields set on this descriptor, read as a change set."""
        return [name for name in self._diffed_fields() if getattr(self, name) is not None]

    @property
    def is_empty(self) -> bool:
        return not self.changed_fields()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"kind": self.KIND}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, ResourceGroupRef):
                value = value.name
            result[f.name] = value
        return result
