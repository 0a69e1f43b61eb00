"""
Peer List Projector.

Projection for cluster and peer responses (dlg.stats_active,
dmq.list_nodes). Top-level numeric fields pass through as plain
metrics; then the whole tree is searched, at any depth, for groups that
describe a peer (they carry a ``host`` field). Each peer becomes one
``peer`` value labeled with its host, status and local flag.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

from kamailio_exporter.domain.entities import MetricValue
from kamailio_exporter.domain.exceptions import FieldDecodeError
from kamailio_exporter.domain.value_objects import DecodedField, ProjectedMetrics
from kamailio_exporter.projectors.common import numeric_fields

logger = logging.getLogger(__name__)

PEER_METRIC = "peer"


@dataclass(frozen=True)
class Peer:
    """A cluster peer."""

    host: str
    status: str
    local: str

    def to_metric_value(self) -> MetricValue:
        return MetricValue(
            value=1,
            labels={"host": self.host, "status": self.status, "local": self.local},
        )


def _label(group: DecodedField, key: str) -> str:
    # "local" is an int on some servers and text on others; keep it opaque
    child = group.find(key, ignore_case=True)
    if child is None:
        return ""
    try:
        return child.as_label()
    except FieldDecodeError as e:
        logger.debug(f"Skipping field: {e}")
        return ""


def parse_peers(root: DecodedField) -> List[Peer]:
    """Every group in the tree that has a ``host`` field, in wire order."""
    peers: List[Peer] = []

    for node in root.walk():
        if not node.is_group or node.find("host", ignore_case=True) is None:
            continue
        peers.append(
            Peer(
                host=_label(node, "host"),
                status=_label(node, "status"),
                local=_label(node, "local"),
            )
        )

    return peers


class PeerListProjector:
    """Plain top-level values plus one ``peer`` value per peer."""

    @property
    def name(self) -> str:
        return "peer_list"

    def project(self, root: DecodedField) -> ProjectedMetrics:
        metrics: Dict[str, List[MetricValue]] = {
            key: [MetricValue(value=value)] for key, value in numeric_fields(root)
        }

        peers = parse_peers(root)
        if peers:
            metrics[PEER_METRIC] = [p.to_metric_value() for p in peers]

        return metrics
