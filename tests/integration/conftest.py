"""
Integration Fixtures - A Minimal BINRPC Server.

The server answers each request from a table of canned records; unknown
methods get a fault reply [500, "command not found"], the way kamailio's
ctl module does.
"""

from __future__ import annotations

import os
import socket
import tempfile
import threading
from typing import Dict, Iterator, List, Optional

import pytest

from kamailio_exporter.adapters.binrpc_transport import (
    PACKET_FAULT,
    PACKET_REPLY,
    BinRpcCodec,
)
from kamailio_exporter.adapters.mock_transport import sample_responses
from kamailio_exporter.domain.value_objects import Record


class FakeKamailio:
    """Threaded BINRPC server serving canned replies."""

    def __init__(self, listener: socket.socket, uri: str) -> None:
        self.listener = listener
        self.listener.settimeout(0.1)
        self.uri = uri
        self.codec = BinRpcCodec()
        self.responses: Dict[str, List[Record]] = sample_responses()
        self.requests: List[str] = []
        self.connections = 0
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self) -> "FakeKamailio":
        self._thread.start()
        return self

    def stop(self) -> None:
        self._stop.set()
        self.listener.close()
        self._thread.join(timeout=2)

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self.listener.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            self.connections += 1
            with conn:
                conn.settimeout(2)
                try:
                    self._handle(conn)
                except OSError:
                    continue

    def _handle(self, conn: socket.socket) -> None:
        while True:
            header = self._recv(conn, 2)
            if header is None:
                return
            _, length_size, cookie_size = self.codec.parse_header(header)
            length = int.from_bytes(self._recv(conn, length_size), "big")
            cookie = self._recv(conn, cookie_size)
            [method_record] = self.codec.decode_body(self._recv(conn, length))
            method = method_record.value
            self.requests.append(method)

            records = self.responses.get(method)
            flags = PACKET_REPLY
            if records is None:
                records = [Record.integer(500), Record.text("command not found")]
                flags = PACKET_FAULT
            body = self.codec.encode_records(records)
            conn.sendall(self.codec.encode_packet(body, cookie, flags))

    def _recv(self, conn: socket.socket, size: int) -> Optional[bytes]:
        data = b""
        while len(data) < size:
            chunk = conn.recv(size - len(data))
            if not chunk:
                return None
            data += chunk
        return data


@pytest.fixture
def tcp_kamailio() -> Iterator[FakeKamailio]:
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(4)
    host, port = listener.getsockname()
    server = FakeKamailio(listener, f"tcp://{host}:{port}").start()
    yield server
    server.stop()


@pytest.fixture
def unix_kamailio() -> Iterator[FakeKamailio]:
    # AF_UNIX paths are length limited; pytest's tmp_path can be too long
    directory = tempfile.mkdtemp()
    path = os.path.join(directory, "kamailio_ctl")
    listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    listener.bind(path)
    listener.listen(4)
    server = FakeKamailio(listener, f"unix:{path}").start()
    yield server
    server.stop()
    os.unlink(path)
    os.rmdir(directory)
