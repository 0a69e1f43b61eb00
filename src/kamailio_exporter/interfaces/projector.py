"""
Projector Protocol.

A projector turns the decoded response tree of one method into values
keyed by local metric name. There is one implementation per method
family; the catalog binds each method to its projector at build time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from kamailio_exporter.domain.value_objects import DecodedField, ProjectedMetrics


@runtime_checkable
class Projector(Protocol):
    """Abstract interface for metric projection."""

    @property
    def name(self) -> str:
        """Family name, used in logs."""
        ...

    def project(self, root: "DecodedField") -> "ProjectedMetrics":
        """
        Project a decoded response.

        Args:
            root: Root group of the decoded response

        Returns:
            Local metric name -> zero or more values

        Raises:
            MalformedResponse: If a mandatory field is missing or malformed
        """
        ...
