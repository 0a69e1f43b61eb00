"""
Response Shape Decoder.

Turns the records returned by one BINRPC call into a DecodedField tree:

    1. [INT(code >= 400), TEXT(message)]  -> RemoteError
    2. anything but one STRUCT record     -> MalformedResponse
    3. the struct, recursively            -> root DecodedField

Terminal values are copied as-is; coercion to int or text is left to
the projector that asks for it.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from kamailio_exporter.domain.exceptions import MalformedResponse, RemoteError
from kamailio_exporter.domain.value_objects import DecodedField, Record, RecordType

logger = logging.getLogger(__name__)

ROOT_KEY = ""

# Lowest integer treated as a server error code in a [code, message] reply
MIN_ERROR_CODE = 400


class ResponseShapeDecoder:
    """Decode raw reply records into a per-scrape field tree."""

    def decode(self, method: str, records: Sequence[Record]) -> DecodedField:
        """
        Decode the reply of one method.

        Args:
            method: Method that produced the records
            records: Records in wire order

        Returns:
            Root group of the decoded tree

        Raises:
            RemoteError: If the server answered with an error code
            MalformedResponse: If the reply is not a single struct
        """
        self._raise_for_remote_error(method, records)

        if len(records) != 1:
            raise MalformedResponse(
                f'invalid response for method "{method}", '
                f"expected 1 record, got {len(records)}",
                method,
            )

        record = records[0]
        if not record.is_struct:
            raise MalformedResponse(
                f'invalid response for method "{method}", '
                f"expected a struct, got {record.type.name.lower()}",
                method,
            )

        root = self._to_field(ROOT_KEY, record)
        logger.debug(f"Decoded {method}: {len(root.children())} top-level fields")
        return root

    def _raise_for_remote_error(self, method: str, records: Sequence[Record]) -> None:
        if len(records) != 2:
            return
        code, message = records
        if (
            code.type == RecordType.INT
            and message.type == RecordType.TEXT
            and code.value >= MIN_ERROR_CODE
        ):
            raise RemoteError(code.value, message.value, method)

    def _to_field(self, key: str, record: Record) -> DecodedField:
        if record.type == RecordType.STRUCT:
            return DecodedField.group(
                key,
                tuple(self._to_field(item.key, item.value) for item in record.value),
            )
        if record.type == RecordType.ARRAY:
            return DecodedField.group(
                key,
                tuple(
                    self._to_field(str(index), child)
                    for index, child in enumerate(record.value)
                ),
            )
        if record.type == RecordType.BYTES:
            return DecodedField.terminal(key, bytes(record.value).decode("utf-8", "replace"))
        return DecodedField.terminal(key, record.value)


def decode_response(method: str, records: List[Record]) -> DecodedField:
    """Convenience function for one-off decoding."""
    return ResponseShapeDecoder().decode(method, records)
