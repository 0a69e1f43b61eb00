"""
BINRPC Transport.

Talks to Kamailio's ctl module over a unix or tcp stream socket using
the BINRPC v1 encoding.

Packet layout:

    | 4 bits | 4 bits | 4 bits | 2 bits | 2 bits |
    | MAGIC  | VERS   | FLAGS  | LL     | CL     | length (LL+1 bytes) | cookie (CL+1 bytes) | body

Record layout:

    | 1 bit | 3 bits | 4 bits |
    | S     | size   | type   | [size bytes if S] | value

With S unset, ``size`` is the value length. With S set, ``size`` is the
number of bytes holding the value length. A struct or array record with
S set and no length closes the current container. Struct members are an
AVP record (the member name, string encoded) followed by the value.

Design Notes:
    - The timeout is a deadline for the whole connection, set once
      after connect; every send/recv gets the time that is left
    - Every socket error, timeout and framing problem is a TransportError
"""

from __future__ import annotations

import logging
import os
import socket
import time
from typing import List, Optional, Tuple

from kamailio_exporter.domain.exceptions import TransportError
from kamailio_exporter.domain.value_objects import Record, RecordType, StructItem

logger = logging.getLogger(__name__)

MAGIC = 0xA
VERSION = 1

PACKET_REQUEST = 0
PACKET_REPLY = 1
PACKET_FAULT = 3

COOKIE_SIZE = 4
MAX_LENGTH_SIZE = 4

END_FLAG = 0x80

# Doubles travel as integers scaled by this factor
DOUBLE_SCALE = 1000


def _int_size(value: int) -> int:
    """Minimal number of bytes holding a non-negative value."""
    size = 0
    while value > 0:
        size += 1
        value >>= 8
    return size


def _encode_int(value: int) -> bytes:
    if value < 0:
        return (value & 0xFFFFFFFF).to_bytes(4, "big")
    return value.to_bytes(_int_size(value), "big")


def _decode_int(data: bytes) -> int:
    value = int.from_bytes(data, "big")
    if len(data) == 4 and value & 0x80000000:
        value -= 1 << 32
    return value


def _record_header(record_type: int, length: int) -> bytes:
    if length < 8:
        return bytes([(length << 4) | record_type])
    size = _int_size(length)
    return bytes([END_FLAG | (size << 4) | record_type]) + length.to_bytes(size, "big")


class BinRpcCodec:
    """Encoder and decoder for BINRPC packets and records."""

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    def encode_packet(self, body: bytes, cookie: bytes, flags: int) -> bytes:
        """Wrap a body in a packet header."""
        length_size = max(1, _int_size(len(body)))
        if length_size > MAX_LENGTH_SIZE:
            raise TransportError(f"packet body too large: {len(body)} bytes")
        header = bytes(
            [
                (MAGIC << 4) | VERSION,
                (flags << 4) | ((length_size - 1) << 2) | (len(cookie) - 1),
            ]
        )
        return header + len(body).to_bytes(length_size, "big") + cookie + body

    def encode_request(self, method: str, cookie: bytes) -> bytes:
        """A request packet calling ``method`` without parameters."""
        return self.encode_packet(
            self.encode_record(Record.text(method)), cookie, PACKET_REQUEST
        )

    def encode_records(self, records: List[Record]) -> bytes:
        return b"".join(self.encode_record(r) for r in records)

    def encode_record(self, record: Record) -> bytes:
        if record.type == RecordType.INT:
            value = _encode_int(record.value)
            return _record_header(RecordType.INT, len(value)) + value

        if record.type == RecordType.DOUBLE:
            value = _encode_int(int(round(record.value * DOUBLE_SCALE)))
            return _record_header(RecordType.DOUBLE, len(value)) + value

        if record.type in (RecordType.TEXT, RecordType.AVP):
            value = record.value.encode("utf-8") + b"\0"
            return _record_header(record.type, len(value)) + value

        if record.type == RecordType.BYTES:
            value = bytes(record.value)
            return _record_header(RecordType.BYTES, len(value)) + value

        if record.type == RecordType.STRUCT:
            body = b"".join(
                self.encode_record(Record(RecordType.AVP, item.key))
                + self.encode_record(item.value)
                for item in record.value
            )
            return bytes([RecordType.STRUCT]) + body + bytes([END_FLAG | RecordType.STRUCT])

        if record.type == RecordType.ARRAY:
            body = self.encode_records(list(record.value))
            return bytes([RecordType.ARRAY]) + body + bytes([END_FLAG | RecordType.ARRAY])

        raise TransportError(f"cannot encode record type {record.type!r}")

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def parse_header(self, data: bytes) -> Tuple[int, int, int]:
        """
        Parse the two fixed header bytes.

        Returns:
            (flags, length_size, cookie_size)
        """
        if len(data) != 2:
            raise TransportError("short packet header")
        if data[0] >> 4 != MAGIC or data[0] & 0x0F != VERSION:
            raise TransportError(f"invalid packet header: 0x{data[0]:02x}")
        flags = data[1] >> 4
        length_size = ((data[1] >> 2) & 0x03) + 1
        cookie_size = (data[1] & 0x03) + 1
        return flags, length_size, cookie_size

    def decode_body(self, body: bytes) -> List[Record]:
        """Decode every top-level record of a packet body."""
        records: List[Record] = []
        offset = 0
        while offset < len(body):
            record, offset, end = self._read_record(body, offset)
            if end:
                raise TransportError("unexpected end of container at top level")
            records.append(record)
        return records

    def _read_record(self, data: bytes, offset: int) -> Tuple[Optional[Record], int, bool]:
        """
        Read one record.

        Returns:
            (record, next offset, closes_container)
        """
        if offset >= len(data):
            raise TransportError("truncated record")

        header = data[offset]
        offset += 1
        record_type = header & 0x0F
        size = (header >> 4) & 0x07
        end_flag = bool(header & END_FLAG)

        if end_flag:
            length = int.from_bytes(self._take(data, offset, size), "big")
            offset += size
        else:
            length = size

        if record_type in (RecordType.STRUCT, RecordType.ARRAY):
            if end_flag:
                return None, offset, True
            return self._read_container(data, offset, RecordType(record_type))

        value = self._take(data, offset, length)
        offset += length

        if record_type == RecordType.INT:
            return Record.integer(_decode_int(value)), offset, False
        if record_type == RecordType.DOUBLE:
            return Record.double(_decode_int(value) / DOUBLE_SCALE), offset, False
        if record_type in (RecordType.TEXT, RecordType.AVP):
            text = value.split(b"\0", 1)[0].decode("utf-8", "replace")
            return Record(RecordType(record_type), text), offset, False
        if record_type == RecordType.BYTES:
            return Record(RecordType.BYTES, value), offset, False

        raise TransportError(f"unknown record type {record_type}")

    def _read_container(
        self, data: bytes, offset: int, container: RecordType
    ) -> Tuple[Record, int, bool]:
        items: list = []
        while True:
            record, offset, end = self._read_record(data, offset)
            if end:
                break
            if container == RecordType.ARRAY:
                items.append(record)
                continue
            if record.type != RecordType.AVP:
                raise TransportError(
                    f"expected struct member name, got {record.type.name.lower()}"
                )
            value, offset, end = self._read_record(data, offset)
            if end:
                raise TransportError(f'struct member "{record.value}" has no value')
            items.append(StructItem(record.value, value))
        return Record(container, tuple(items)), offset, False

    def _take(self, data: bytes, offset: int, length: int) -> bytes:
        if offset + length > len(data):
            raise TransportError("truncated record")
        return data[offset:offset + length]


class BinRpcConnection:
    """A connected socket with a connection-wide deadline."""

    def __init__(self, sock: socket.socket, timeout: float) -> None:
        self.sock = sock
        self.deadline = time.monotonic() + timeout

    def close(self) -> None:
        self.sock.close()

    def send_all(self, data: bytes) -> None:
        self._arm()
        try:
            self.sock.sendall(data)
        except OSError as e:
            raise TransportError(f"write failed: {e}") from e

    def recv_exactly(self, size: int) -> bytes:
        chunks = []
        remaining = size
        while remaining > 0:
            self._arm()
            try:
                chunk = self.sock.recv(remaining)
            except OSError as e:
                raise TransportError(f"read failed: {e}") from e
            if not chunk:
                raise TransportError("connection closed by peer")
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def _arm(self) -> None:
        left = self.deadline - time.monotonic()
        if left <= 0:
            raise TransportError("i/o timeout")
        self.sock.settimeout(left)


class BinRpcTransport:
    """RpcTransport implementation over BINRPC."""

    def __init__(self, codec: Optional[BinRpcCodec] = None) -> None:
        self.codec = codec or BinRpcCodec()

    def dial(self, scheme: str, address: str, timeout: float) -> BinRpcConnection:
        try:
            if scheme == "unix":
                sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
                sock.settimeout(timeout)
                try:
                    sock.connect(address)
                except OSError:
                    sock.close()
                    raise
            elif scheme == "tcp":
                host, _, port = address.rpartition(":")
                sock = socket.create_connection(
                    (host.strip("[]"), int(port)), timeout=timeout
                )
            else:
                raise TransportError(f"unsupported scheme: {scheme}")
        except (OSError, ValueError) as e:
            raise TransportError(f"dial {scheme} {address}: {e}") from e

        logger.debug(f"Connected to {scheme}:{address}")
        return BinRpcConnection(sock, timeout)

    def call(self, connection: BinRpcConnection, method: str) -> List[Record]:
        cookie = os.urandom(COOKIE_SIZE)
        connection.send_all(self.codec.encode_request(method, cookie))
        return self.read_reply(connection, cookie)

    def read_reply(self, connection: BinRpcConnection, cookie: bytes) -> List[Record]:
        """Read one reply packet and check its cookie."""
        flags, length_size, cookie_size = self.codec.parse_header(
            connection.recv_exactly(2)
        )
        length = int.from_bytes(connection.recv_exactly(length_size), "big")
        reply_cookie = connection.recv_exactly(cookie_size)

        if reply_cookie != cookie:
            raise TransportError(
                f"cookie mismatch: sent {cookie.hex()}, got {reply_cookie.hex()}"
            )

        records = self.codec.decode_body(connection.recv_exactly(length))
        if flags == PACKET_FAULT:
            logger.debug(f"Fault reply: {records}")
        return records
