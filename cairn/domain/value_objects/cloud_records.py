"""
Cloud Records

Architectural Intent:
- Value objects for what the cloud gateway sends and receives
- Shaped after the Azure Resource Manager Disk / ResourceGroup payloads,
  flattened to the fields the reconcilers care about
- Adapters translate SDK models to and from these; the domain never sees
  SDK types
"""

from dataclasses import dataclass, field
from typing import Optional

DISK_CREATE_OPTION_EMPTY = "Empty"


@dataclass(frozen=True)
class DiskRecord:
    """A managed disk as requested from or reported by the gateway."""
    name: str
    location: str
    size_gb: Optional[int] = None
    sku: Optional[str] = None
    tags: dict[str, str] = field(default_factory=dict)
    zones: tuple[str, ...] = ()
    id: Optional[str] = None
    create_option: str = DISK_CREATE_OPTION_EMPTY
    provisioning_state: Optional[str] = None


@dataclass(frozen=True)
class ResourceGroupRecord:
    """A resource group as requested from or reported by the gateway."""
    name: str
    location: str
    tags: dict[str, str] = field(default_factory=dict)
    id: Optional[str] = None
    provisioning_state: Optional[str] = None
