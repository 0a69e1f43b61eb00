"""
Projectors Package - Method-Family Projection Policies.

Projectors:
    - FlatProjector: One metric per top-level field
    - CodeBucketProjector: Flat, with status codes folded into "codes"
    - DispatcherProjector: Recursive RECORDS/SET/TARGETS/DEST walk
    - PeerListProjector: Recursive search for peer groups
"""

from kamailio_exporter.projectors.dispatcher import DispatcherProjector
from kamailio_exporter.projectors.flat import CodeBucketProjector, FlatProjector
from kamailio_exporter.projectors.peers import PeerListProjector

__all__ = [
    "CodeBucketProjector",
    "DispatcherProjector",
    "FlatProjector",
    "PeerListProjector",
]
