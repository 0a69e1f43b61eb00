"""
Dispatcher Projector.

Walks the ``dispatcher.list`` response:

    RECORDS
      SET            (repeated)
        ID           (mandatory)
        TARGETS
          DEST       (repeated)
            URI
            FLAGS

Each destination becomes one ``target`` value labeled with its URI,
flags and set ID. A set without destinations contributes nothing; a set
without an ID fails the whole method.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from kamailio_exporter.domain.entities import MetricValue
from kamailio_exporter.domain.exceptions import MissingSetID
from kamailio_exporter.domain.value_objects import DecodedField, ProjectedMetrics
from kamailio_exporter.projectors.common import optional_text

TARGET_METRIC = "target"


@dataclass(frozen=True)
class DispatcherTarget:
    """A destination of a dispatcher set."""

    uri: str
    flags: str
    set_id: int

    def to_metric_value(self) -> MetricValue:
        return MetricValue(
            value=1,
            labels={"uri": self.uri, "flags": self.flags, "setid": str(self.set_id)},
        )


def parse_dispatcher_targets(root: DecodedField) -> List[DispatcherTarget]:
    """
    Collect every destination of every set.

    Raises:
        MissingSetID: If a set has no ID
        FieldDecodeError: If an ID is not an integer or a structural
            level is not a group
    """
    result: List[DispatcherTarget] = []

    for records in root.find_all("RECORDS"):
        for dispatcher_set in records.find_all("SET"):
            result.extend(_parse_set(dispatcher_set))

    return result


def _parse_set(dispatcher_set: DecodedField) -> List[DispatcherTarget]:
    set_id: Optional[int] = None
    destinations: List[DecodedField] = []

    for item in dispatcher_set.children():
        if item.key == "ID":
            set_id = item.as_int()
        elif item.key == "TARGETS":
            destinations.extend(item.find_all("DEST"))

    if set_id is None:
        raise MissingSetID()

    return [
        DispatcherTarget(
            uri=optional_text(dest, "URI"),
            flags=optional_text(dest, "FLAGS"),
            set_id=set_id,
        )
        for dest in destinations
    ]


class DispatcherProjector:
    """One ``target`` value per dispatcher destination."""

    @property
    def name(self) -> str:
        return "dispatcher"

    def project(self, root: DecodedField) -> ProjectedMetrics:
        targets = parse_dispatcher_targets(root)
        if not targets:
            return {}
        return {TARGET_METRIC: [t.to_metric_value() for t in targets]}
