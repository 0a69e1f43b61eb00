"""
RPC Transport Protocol.

Defines the boundary to the BINRPC wire layer. The orchestrator only
needs to open a connection, issue one call per method and close it;
framing, cookies and type tags stay behind this interface.

Design Notes:
    - One connection per scrape cycle, never pooled
    - The timeout is applied once to the whole connection
    - Every I/O or framing failure surfaces as TransportError
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kamailio_exporter.domain.value_objects import Record


@runtime_checkable
class RpcConnection(Protocol):
    """An open control-socket connection."""

    def close(self) -> None:
        ...


@runtime_checkable
class RpcTransport(Protocol):
    """Abstract interface for the BINRPC transport."""

    def dial(self, scheme: str, address: str, timeout: float) -> RpcConnection:
        """
        Open a connection.

        Args:
            scheme: "tcp" or "unix"
            address: "host:port" for tcp, a filesystem path for unix
            timeout: Seconds allowed for the whole connection

        Raises:
            TransportError: If the connection cannot be established
        """
        ...

    def call(self, connection: RpcConnection, method: str) -> List["Record"]:
        """
        Invoke a method and return the decoded reply records.

        Raises:
            TransportError: On I/O, timeout or framing failure
        """
        ...
