"""
Metric Catalog - Per-Method Metric Definitions and Projectors.

This module provides a thread-safe registry mapping each supported
Kamailio method to the ordered metric definitions it can produce and to
the projector that extracts them from a decoded response.

Usage:
    catalog = MetricCatalog()
    catalog.register("core.uptime", [counter("uptime", ...)], FlatProjector())

    catalog.is_supported("core.uptime")      # True
    definitions = catalog.lookup("core.uptime")
    projector = catalog.projector_for("core.uptime")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Dict, List, Protocol, Sequence

from kamailio_exporter.domain.entities import MetricDefinition
from kamailio_exporter.domain.exceptions import UnknownMethod
from kamailio_exporter.interfaces.projector import Projector

logger = logging.getLogger(__name__)


@dataclass
class MethodInfo:
    """A registered method."""

    method: str
    definitions: List[MetricDefinition]
    projector: Projector


class MetricCatalogProtocol(Protocol):
    """Protocol for metric catalog implementations."""

    def lookup(self, method: str) -> List[MetricDefinition]:
        """Ordered definitions for a method."""
        ...

    def projector_for(self, method: str) -> Projector:
        """Projector bound to a method."""
        ...

    def is_supported(self, method: str) -> bool:
        """Whether a method is registered."""
        ...

    def available_methods(self) -> List[str]:
        """Registered methods in registration order."""
        ...


class MetricCatalog:
    """
    Thread-safe registry of supported methods.

    Built once at startup and then only read; the lock guards the
    registration phase and keeps reads consistent if a method is added
    later.
    """

    def __init__(self) -> None:
        """Initialize empty catalog."""
        self._methods: Dict[str, MethodInfo] = {}
        self._lock = RLock()
        logger.debug("MetricCatalog initialized")

    def register(
        self,
        method: str,
        definitions: Sequence[MetricDefinition],
        projector: Projector,
    ) -> None:
        """
        Register a method with its definitions and projector.

        Args:
            method: Kamailio method name, e.g. "tm.stats"
            definitions: Metrics the method can produce, in emission order
            projector: Projection policy for the method's responses

        Raises:
            ValueError: If the method is already registered, a definition
                belongs to another method, or local names repeat
        """
        with self._lock:
            if method in self._methods:
                raise ValueError(f"Method '{method}' is already registered.")

            foreign = [d.name for d in definitions if d.method != method]
            if foreign:
                raise ValueError(
                    f"Definitions {foreign} do not belong to method '{method}'"
                )

            names = [d.name for d in definitions]
            if len(set(names)) != len(names):
                raise ValueError(f"Duplicate metric names for method '{method}'")

            self._methods[method] = MethodInfo(
                method=method,
                definitions=list(definitions),
                projector=projector,
            )
            logger.debug(
                f"Registered method: {method} ({len(names)} metrics, "
                f"projector={projector.name})"
            )

    def lookup(self, method: str) -> List[MetricDefinition]:
        """
        Ordered metric definitions for a method.

        Raises:
            UnknownMethod: If the method is not registered
        """
        return list(self._get(method).definitions)

    def projector_for(self, method: str) -> Projector:
        """
        Projector bound to a method.

        Raises:
            UnknownMethod: If the method is not registered
        """
        return self._get(method).projector

    def is_supported(self, method: str) -> bool:
        with self._lock:
            return method in self._methods

    def available_methods(self) -> List[str]:
        with self._lock:
            return list(self._methods)

    def _get(self, method: str) -> MethodInfo:
        with self._lock:
            info = self._methods.get(method)
            if info is None:
                raise UnknownMethod(method)
            return info
