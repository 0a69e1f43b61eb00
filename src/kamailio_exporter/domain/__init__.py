"""
Domain Layer - Metric Model, Wire Records and Decoded Trees.

Entities:
    - MetricDefinition: What a method can produce (name, kind, help)
    - MetricValue: Projected value with labels
    - MetricSample: Value bound to its definition

Value Objects:
    - Record / StructItem: Typed BINRPC records
    - DecodedField: Per-scrape response tree

Exceptions:
    - InvalidConfiguration, ScrapeError and subclasses
"""

from kamailio_exporter.domain.entities import (
    MetricDefinition,
    MetricKind,
    MetricSample,
    MetricValue,
)
from kamailio_exporter.domain.value_objects import (
    DecodedField,
    Record,
    RecordType,
    StructItem,
)

__all__ = [
    "MetricDefinition",
    "MetricKind",
    "MetricSample",
    "MetricValue",
    "DecodedField",
    "Record",
    "RecordType",
    "StructItem",
]
