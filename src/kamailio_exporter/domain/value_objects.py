"""
Value Objects for Domain Layer.

Two layers of values live here:
    - Record / StructItem: typed records as they come off the wire
    - DecodedField: the per-scrape tree the projectors walk

Both are immutable. A DecodedField tree is built for one method call,
walked by one projector and then dropped; nothing in it points back up.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from kamailio_exporter.domain.entities import MetricValue
from kamailio_exporter.domain.exceptions import FieldDecodeError

# =============================================================================
# Type Aliases for improved readability
# =============================================================================

# Terminal values a decoded field may hold
Scalar = Union[int, float, str]

# Projector output: local metric name -> values
ProjectedMetrics = Dict[str, List[MetricValue]]


class RecordType(IntEnum):
    """BINRPC record types."""

    INT = 0
    TEXT = 1
    DOUBLE = 2
    STRUCT = 3
    ARRAY = 4
    AVP = 5
    BYTES = 6


@dataclass(frozen=True)
class StructItem:
    """Named member of a struct record."""

    key: str
    value: "Record"


@dataclass(frozen=True)
class Record:
    """A typed record decoded from a BINRPC packet."""

    type: RecordType
    value: Any

    @classmethod
    def integer(cls, value: int) -> "Record":
        return cls(RecordType.INT, value)

    @classmethod
    def text(cls, value: str) -> "Record":
        return cls(RecordType.TEXT, value)

    @classmethod
    def double(cls, value: float) -> "Record":
        return cls(RecordType.DOUBLE, value)

    @classmethod
    def struct(cls, *items: Tuple[str, "Record"]) -> "Record":
        """Build a struct from (key, record) pairs; keys may repeat."""
        return cls(RecordType.STRUCT, tuple(StructItem(k, v) for k, v in items))

    @classmethod
    def array(cls, *records: "Record") -> "Record":
        return cls(RecordType.ARRAY, tuple(records))

    @property
    def is_struct(self) -> bool:
        return self.type == RecordType.STRUCT

    def struct_items(self) -> Tuple[StructItem, ...]:
        if self.type != RecordType.STRUCT:
            raise FieldDecodeError("<record>", "struct", self.type.name.lower())
        return self.value


@dataclass(frozen=True)
class DecodedField:
    """
    Node of the decoded response tree.

    A node is either terminal (``scalar`` set) or a group (``fields``
    set). Group children keep wire order and keys may repeat, which is
    how repeated ``SET`` and ``DEST`` entries are represented.

    Coercions are done on demand by the caller; a node of the wrong shape
    raises FieldDecodeError, which the caller may skip or propagate.
    """

    key: str
    scalar: Optional[Scalar] = None
    fields: Optional[Tuple["DecodedField", ...]] = None

    @classmethod
    def group(cls, key: str, fields: Tuple["DecodedField", ...] = ()) -> "DecodedField":
        return cls(key=key, fields=tuple(fields))

    @classmethod
    def terminal(cls, key: str, value: Scalar) -> "DecodedField":
        return cls(key=key, scalar=value)

    @property
    def is_group(self) -> bool:
        return self.fields is not None

    def _shape(self) -> str:
        if self.is_group:
            return "group"
        return type(self.scalar).__name__

    def as_int(self) -> int:
        """Integer value; bools and text are rejected."""
        if isinstance(self.scalar, int) and not isinstance(self.scalar, bool):
            return self.scalar
        raise FieldDecodeError(self.key, "int", self._shape())

    def as_number(self) -> float:
        """Numeric value of an int or double field."""
        if isinstance(self.scalar, (int, float)) and not isinstance(self.scalar, bool):
            return float(self.scalar)
        raise FieldDecodeError(self.key, "number", self._shape())

    def as_text(self) -> str:
        if isinstance(self.scalar, str):
            return self.scalar
        raise FieldDecodeError(self.key, "text", self._shape())

    def as_label(self) -> str:
        """Any terminal value rendered as label text."""
        if self.is_group:
            raise FieldDecodeError(self.key, "terminal", "group")
        return str(self.scalar)

    def children(self) -> Tuple["DecodedField", ...]:
        if self.fields is None:
            raise FieldDecodeError(self.key, "group", self._shape())
        return self.fields

    def find(self, key: str, ignore_case: bool = False) -> Optional["DecodedField"]:
        """First direct child with the given key."""
        for child in self.find_all(key, ignore_case):
            return child
        return None

    def find_all(self, key: str, ignore_case: bool = False) -> Iterator["DecodedField"]:
        """Direct children with the given key, in wire order."""
        wanted = key.lower() if ignore_case else key
        for child in self.children():
            child_key = child.key.lower() if ignore_case else child.key
            if child_key == wanted:
                yield child

    def walk(self) -> Iterator["DecodedField"]:
        """Depth-first pre-order traversal, this node included."""
        stack: List[DecodedField] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.fields:
                stack.extend(reversed(node.fields))
