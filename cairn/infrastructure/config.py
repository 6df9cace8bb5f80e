"""
Configuration Module

Architectural Intent:
- Settings for a cairn run: cluster identity, Azure target, telemetry
- Read from an optional JSON file, then overridden from the environment
- A missing or unreadable file is not an error; defaults apply

Design Decisions:
- Each section is a frozen dataclass; CairnConfig nests them
- Environment names are derived from the section and field names
  (CAIRN_AZURE_SUBSCRIPTION_ID -> azure.subscription_id), so only known
  settings are ever read
- Values coming from the environment are strings and are coerced to the
  declared field type; unknown file keys are dropped
- The cluster identity tag is configuration, handed to reconcilers as a
  ReconcileContext by the composition root
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "cairn.json"
TRUE_STRINGS = ("true", "1", "yes", "on")


@dataclass(frozen=True)
class ClusterConfig:
    """Identity stamped onto every managed resource."""
    name: str = "cairn"
    tag_key: str = "ClusterName"


@dataclass(frozen=True)
class AzureConfig:
    """Azure target. simulate swaps Azure for the in-memory backend."""
    subscription_id: str = ""
    location: str = "eastus"
    simulate: bool = False


@dataclass(frozen=True)
class TelemetryConfig:
    endpoint: str = ""
    insecure: bool = False
    service_name: str = "cairn"


@dataclass(frozen=True)
class CairnConfig:
    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    azure: AzureConfig = field(default_factory=AzureConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"


SECTIONS: dict[str, type] = {
    "cluster": ClusterConfig,
    "azure": AzureConfig,
    "telemetry": TelemetryConfig,
}


def _coerce(value: Any, type_name: str) -> Any:
    if not isinstance(value, str):
        return value
    if type_name == "bool":
        return value.strip().lower() in TRUE_STRINGS
    if type_name == "int":
        return int(value)
    return value


def _read_file(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("No config file at %s, using defaults", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Ignoring invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level must be an object", path)
        return {}
    return data


def _section(cls: type, values: Any, prefix: str, section: str) -> Any:
    values = values if isinstance(values, dict) else {}
    kwargs = {}
    for f in fields(cls):
        env_name = f"{prefix}_{section}_{f.name}".upper()
        if env_name in os.environ:
            kwargs[f.name] = _coerce(os.environ[env_name], f.type)
        elif f.name in values:
            kwargs[f.name] = _coerce(values[f.name], f.type)
    return cls(**kwargs)


def load_config(path: Optional[str] = None, env_prefix: str = "CAIRN") -> CairnConfig:
    """Load configuration.

    Priority, highest first: environment (CAIRN_SECTION_FIELD, CAIRN_LOG_LEVEL),
    the JSON file at `path` (default ./cairn.json), built-in defaults.
    """
    data = _read_file(Path(path or DEFAULT_CONFIG_FILE))
    sections = {
        name: _section(cls, data.get(name), env_prefix, name)
        for name, cls in SECTIONS.items()
    }
    log_level = os.environ.get(f"{env_prefix}_LOG_LEVEL", data.get("log_level", "WARNING"))
    return CairnConfig(log_level=log_level, **sections)
