"""
Adapters Package - Infrastructure Implementations.

Concrete implementations of the abstract interfaces defined in the
interfaces package (Ports & Adapters).

Transports:
    - BinRpcTransport: BINRPC over unix or tcp sockets
    - MockTransport: Canned replies for development/testing

Sinks:
    - KamailioCollector: prometheus_client custom collector

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
    - No projection logic in adapters
"""

from kamailio_exporter.adapters.binrpc_transport import BinRpcCodec, BinRpcTransport
from kamailio_exporter.adapters.mock_transport import MockTransport, sample_responses
from kamailio_exporter.adapters.prometheus_collector import (
    KamailioCollector,
    build_registry,
    render,
)

__all__ = [
    "BinRpcCodec",
    "BinRpcTransport",
    "MockTransport",
    "sample_responses",
    "KamailioCollector",
    "build_registry",
    "render",
]
