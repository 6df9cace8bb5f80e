from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Optional

from cairn.domain.entities.resource import ManagedResource


@dataclass
class ResourceGroup(ManagedResource):
    """
    Desired or actual state of an Azure resource group.

    A shared group belongs to someone else: cairn only checks that it
    exists and never creates or updates it.
    """
    KIND: ClassVar[str] = "ResourceGroup"
    UNDIFFED_FIELDS: ClassVar[frozenset[str]] = frozenset({"lifecycle", "id", "shared"})

    location: Optional[str] = None
    shared: bool = False

    def __str__(self) -> str:
        return self.name or "?"
