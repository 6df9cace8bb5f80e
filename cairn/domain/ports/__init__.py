"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from cairn.domain.ports.cloud_gateway_port import CloudGatewayPort
from cairn.domain.ports.event_bus_port import EventBusPort

__all__ = [
    "CloudGatewayPort",
    "EventBusPort",
]
