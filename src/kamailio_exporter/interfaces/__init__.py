"""
Interfaces Layer - Abstract Protocols for Dependencies.

High-level modules depend on these abstractions, not on concrete
implementations.

Protocols:
    - RpcTransport / RpcConnection: BINRPC call boundary
    - Projector: Method-family projection policy

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - Small, focused interfaces
"""

from kamailio_exporter.interfaces.projector import Projector
from kamailio_exporter.interfaces.rpc_transport import RpcConnection, RpcTransport

__all__ = ["Projector", "RpcConnection", "RpcTransport"]
