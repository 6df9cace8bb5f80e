"""
cairn Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for observability
- Reconciliation traces and outcome metrics
"""

from cairn.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
    create_exporter,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
    "create_exporter",
]
