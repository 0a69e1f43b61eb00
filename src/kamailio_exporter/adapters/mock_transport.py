"""
Canned-Response Transport.

A fake transport for development and testing. Answers every method
with a fixed list of records (or raises a fixed error) and records what
was dialed, called and closed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from kamailio_exporter.domain.exceptions import TransportError
from kamailio_exporter.domain.value_objects import Record

Response = Union[List[Record], Exception]


@dataclass
class MockConnection:
    """Connection handed out by MockTransport."""

    scheme: str
    address: str
    timeout: float
    closed: bool = False
    calls: List[str] = field(default_factory=list)

    def close(self) -> None:
        self.closed = True


def sample_responses() -> Dict[str, List[Record]]:
    """Realistic replies for every supported method."""
    S, N, T = Record.struct, Record.integer, Record.text

    return {
        "tm.stats": [
            S(
                ("current", N(1)),
                ("waiting", N(0)),
                ("total", N(9514528)),
                ("total_local", N(2794613)),
                ("rpl_received", N(19902190)),
                ("rpl_generated", N(4965793)),
                ("rpl_sent", N(19908572)),
                ("6xx", N(7782)),
                ("5xx", N(2286589)),
                ("4xx", N(961055)),
                ("3xx", N(0)),
                ("2xx", N(6267549)),
                ("created", N(9514528)),
                ("freed", N(9514527)),
                ("delayed_free", N(0)),
            )
        ],
        "sl.stats": [
            S(
                ("200", N(666263)),
                ("202", N(0)),
                ("2xx", N(0)),
                ("400", N(5883)),
                ("4xx", N(5621)),
                ("5xx", N(0)),
                ("xxx", N(0)),
            )
        ],
        "core.shmmem": [
            S(
                ("total", N(67108864)),
                ("free", N(61189608)),
                ("used", N(2590984)),
                ("real_used", N(5919256)),
                ("max_used", N(13323296)),
                ("fragments", N(44546)),
            )
        ],
        "core.uptime": [
            S(
                ("now", N(1700000000)),
                ("up_since", N(1699987655)),
                ("uptime", N(12345)),
            )
        ],
        "core.tcp_info": [
            S(
                ("readers", N(8)),
                ("max_connections", N(4096)),
                ("max_tls_connections", N(2048)),
                ("opened_connections", N(595)),
                ("opened_tls_connections", N(401)),
                ("write_queued_bytes", N(0)),
            )
        ],
        "tls.info": [
            S(
                ("max_connections", N(2048)),
                ("opened_connections", N(401)),
                ("clear_text_write_queued_bytes", N(0)),
            )
        ],
        "dispatcher.list": [
            S(
                ("NRSETS", N(1)),
                (
                    "RECORDS",
                    S(
                        (
                            "SET",
                            S(
                                ("ID", N(2)),
                                (
                                    "TARGETS",
                                    S(
                                        ("DEST", S(("URI", T("sip:10.0.0.1")), ("FLAGS", T("AP")), ("PRIORITY", N(0)))),
                                        ("DEST", S(("URI", T("sip:10.0.0.2")), ("FLAGS", T("D")), ("PRIORITY", N(0)))),
                                    ),
                                ),
                            ),
                        ),
                    ),
                ),
            )
        ],
        "dlg.stats_active": [
            S(
                ("starting", N(152)),
                ("connecting", N(674)),
                ("answering", N(0)),
                ("ongoing", N(512)),
                ("all", N(1338)),
            )
        ],
        # Synthetic shape: nodes wrapped in one NODES array so the reply
        # stays a single struct. Kamailio itself answers with one top-level
        # struct per node, which is rejected as a malformed response.
        "dmq.list_nodes": [
            S(
                (
                    "NODES",
                    Record.array(
                        S(("host", T("10.0.0.10")), ("port", N(5060)), ("status", T("active")), ("local", N(1))),
                        S(("host", T("10.0.0.11")), ("port", N(5060)), ("status", T("pending")), ("local", N(0))),
                    ),
                ),
            )
        ],
    }


class MockTransport:
    """Fake transport answering from a table of canned responses."""

    def __init__(
        self,
        responses: Optional[Dict[str, Response]] = None,
        dial_error: Optional[Exception] = None,
    ) -> None:
        """
        Initialize mock transport.

        Args:
            responses: Method -> records, or an exception to raise
            dial_error: Exception raised by every dial
        """
        self.responses: Dict[str, Response] = (
            dict(responses) if responses is not None else dict(sample_responses())
        )
        self.dial_error = dial_error
        self.connections: List[MockConnection] = []

    def dial(self, scheme: str, address: str, timeout: float) -> MockConnection:
        if self.dial_error is not None:
            raise self.dial_error
        connection = MockConnection(scheme, address, timeout)
        self.connections.append(connection)
        return connection

    def call(self, connection: MockConnection, method: str) -> List[Record]:
        if connection.closed:
            raise TransportError("use of closed connection")
        connection.calls.append(method)

        response = self.responses.get(method)
        if response is None:
            raise TransportError(f"no canned response for {method}")
        if isinstance(response, Exception):
            raise response
        return list(response)

    @property
    def last_connection(self) -> Optional[MockConnection]:
        return self.connections[-1] if self.connections else None

    @property
    def dialed(self) -> List[Tuple[str, str, float]]:
        return [(c.scheme, c.address, c.timeout) for c in self.connections]
