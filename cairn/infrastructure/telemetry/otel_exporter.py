"""
OpenTelemetry Exporter for cairn

Architectural Intent:
- Installs OTLP trace and metric pipelines for a reconciliation run
- The use case opens one span per pass through the OpenTelemetry API; this
  module decides whether those spans (and the outcome counters) leave the
  process
- Without an endpoint nothing is exported, but counted values are still kept
  in a local buffer that callers and tests can drain

Security:
- Endpoint must be configured explicitly; empty means disabled
- Plain http:// is only accepted for loopback hosts unless insecure=True
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any, Optional
from urllib.parse import urlparse
import logging

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)

RECONCILE_OUTCOME = "cairn.reconcile.outcome"
GATEWAY_ERRORS = "cairn.gateway.errors"
LOOPBACK_HOSTS = ("localhost", "127.0.0.1", "::1")


def _check_endpoint(endpoint: str, insecure: bool) -> None:
    parsed = urlparse(endpoint)
    if parsed.scheme == "http" and parsed.hostname not in LOOPBACK_HOSTS and not insecure:
        raise ValueError(
            f"Refusing plaintext export to '{endpoint}': use https:// "
            "or pass insecure=True"
        )


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "cairn"
    environment: str = "development"
    enable_traces: bool = True
    enable_metrics: bool = True
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            _check_endpoint(self.endpoint, self.insecure)


class OTELExporter:
    """Ships reconcile spans and counters over OTLP/gRPC."""

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._metrics_buffer: list[dict[str, Any]] = []
        self._counters: dict[str, Any] = {}
        self._meter: Any = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        if not self.config.endpoint:
            logger.info("No OTLP endpoint configured; telemetry stays local")
            return

        resource = Resource(
            attributes={
                SERVICE_NAME: self.config.service_name,
                "deployment.environment": self.config.environment,
            }
        )
        endpoint, insecure = self.config.endpoint, self.config.insecure

        if self.config.enable_traces:
            tracer_provider = TracerProvider(resource=resource)
            tracer_provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=insecure))
            )
            trace.set_tracer_provider(tracer_provider)

        if self.config.enable_metrics:
            reader = PeriodicExportingMetricReader(
                OTLPMetricExporter(endpoint=endpoint, insecure=insecure)
            )
            metrics.set_meter_provider(
                MeterProvider(resource=resource, metric_readers=[reader])
            )
            self._meter = metrics.get_meter(__name__)

        self._initialized = True
        logger.info("Exporting telemetry to %s", endpoint)

    def _counter(self, name: str) -> Any:
        if self._meter is None:
            return None
        if name not in self._counters:
            self._counters[name] = self._meter.create_counter(name)
        return self._counters[name]

    def record_metric(
        self,
        name: str,
        value: float,
        attributes: Optional[dict[str, str]] = None,
    ) -> None:
        attributes = attributes or {}
        self._metrics_buffer.append(
            {
                "name": name,
                "value": value,
                "attributes": attributes,
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )
        counter = self._counter(name) if self._initialized else None
        if counter is not None:
            counter.add(value, attributes=attributes)

    def record_reconcile_outcome(self, kind: str, state: str) -> None:
        """Count one finished reconciliation pass by kind and final state."""
        self.record_metric(RECONCILE_OUTCOME, 1.0, attributes={"kind": kind, "state": state})

    def record_transport_error(self, kind: str, operation: str) -> None:
        self.record_metric(
            GATEWAY_ERRORS, 1.0, attributes={"kind": kind, "operation": operation}
        )

    def drain(self) -> list[dict[str, Any]]:
        """Return and clear the local metric buffer."""
        drained, self._metrics_buffer = self._metrics_buffer, []
        return drained


def create_exporter(
    endpoint: Optional[str] = None,
    service_name: str = "cairn",
    insecure: bool = False,
) -> OTELExporter:
    exporter = OTELExporter(
        OTELConfig(endpoint=endpoint or "", service_name=service_name, insecure=insecure)
    )
    exporter.initialize()
    return exporter
