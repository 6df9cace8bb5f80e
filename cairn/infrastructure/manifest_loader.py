"""
Manifest Loader

Architectural Intent:
- Reads the desired-state manifest (JSON) into domain descriptors
- Structural problems are reported as ManifestError; semantic checks such as
  a missing disk name are left to the reconcilers, which reject the pass

Manifest layout:
    {
      "resourceGroups": [{"name": "rg", "location": "eastus", "tags": {...},
                          "shared": false, "lifecycle": "Sync"}],
      "disks": [{"name": "disk", "resourceGroup": "rg", "sizeGB": 32,
                 "volumeType": "StandardSSD_LRS", "zones": ["1"],
                 "tags": {...}, "lifecycle": "Sync"}]
    }
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import json
import logging

from cairn.domain.entities.disk import Disk
from cairn.domain.entities.resource_group import ResourceGroup
from cairn.domain.errors import ManifestError
from cairn.domain.value_objects.disk_storage_account_type import DiskStorageAccountType
from cairn.domain.value_objects.lifecycle import Lifecycle
from cairn.domain.value_objects.resource_group_ref import ResourceGroupRef

logger = logging.getLogger(__name__)


@dataclass
class Manifest:
    resource_groups: list[ResourceGroup] = field(default_factory=list)
    disks: list[Disk] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.resource_groups) + len(self.disks)


def _tags(value: Any) -> Optional[dict[str, str]]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError("tags must be an object")
    for k, v in value.items():
        if not isinstance(v, str):
            raise ValueError(f"tag {k!r} must have a string value")
    return dict(value)


def _lifecycle(item: dict) -> Lifecycle:
    value = item.get("lifecycle")
    return Lifecycle.parse(value) if value else Lifecycle.SYNC


def _size(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"sizeGB must be an integer, got {value!r}")
    return value


def _string(item: dict, key: str) -> Optional[str]:
    value = item.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")
    return value


def _zones(value: Any) -> Optional[list[str]]:
    if value is None:
        return None
    if not isinstance(value, list):
        raise ValueError("zones must be a list")
    return [str(z) for z in value]


def parse_disk(item: dict) -> Disk:
    group = _string(item, "resourceGroup")
    volume_type = _string(item, "volumeType")
    return Disk(
        name=_string(item, "name"),
        lifecycle=_lifecycle(item),
        resource_group=ResourceGroupRef(group) if group else None,
        size_gb=_size(item.get("sizeGB")),
        volume_type=DiskStorageAccountType(volume_type) if volume_type else None,
        zones=_zones(item.get("zones")),
        tags=_tags(item.get("tags")),
    )


def parse_resource_group(item: dict) -> ResourceGroup:
    shared = item.get("shared", False)
    if not isinstance(shared, bool):
        raise ValueError(f"shared must be true or false, got {shared!r}")
    return ResourceGroup(
        name=_string(item, "name"),
        lifecycle=_lifecycle(item),
        location=_string(item, "location"),
        tags=_tags(item.get("tags")),
        shared=shared,
    )


def parse_manifest(data: Any) -> Manifest:
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a JSON object")

    manifest = Manifest()
    sections = (
        ("resourceGroups", parse_resource_group, manifest.resource_groups),
        ("disks", parse_disk, manifest.disks),
    )
    for key, parse, target in sections:
        items = data.get(key, [])
        if not isinstance(items, list):
            raise ManifestError(f"{key} must be a list")
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ManifestError(f"{key}[{index}] must be an object")
            try:
                target.append(parse(item))
            except (ValueError, TypeError) as e:
                raise ManifestError(f"{key}[{index}]: {e}") from e
    return manifest


def load_manifest(path: str) -> Manifest:
    """Load and parse a manifest file."""
    try:
        with open(Path(path)) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e

    manifest = parse_manifest(data)
    logger.debug(
        "Loaded manifest %s: %d resource group(s), %d disk(s)",
        path,
        len(manifest.resource_groups),
        len(manifest.disks),
    )
    return manifest
