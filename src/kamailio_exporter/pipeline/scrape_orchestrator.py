"""
Scrape Orchestrator - One Collection Pass.

The ScrapeOrchestrator runs a full scrape cycle:

    Idle -> Connecting -> (per method, in configured order)
            Calling -> Decoding -> Projecting -> Idle

Any failure aborts the whole cycle: no method samples are returned for
it, the failure is counted and logged, and the health series are still
reported. There are no retries; the next collection pass is a fresh
attempt.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from kamailio_exporter.catalog.metric_catalog import MetricCatalogProtocol
from kamailio_exporter.config.models import ExporterConfig
from kamailio_exporter.decoding.response_decoder import ResponseShapeDecoder
from kamailio_exporter.domain.entities import MetricDefinition, MetricSample
from kamailio_exporter.domain.exceptions import ScrapeError
from kamailio_exporter.domain.value_objects import ProjectedMetrics
from kamailio_exporter.interfaces.projector import Projector
from kamailio_exporter.interfaces.rpc_transport import RpcConnection, RpcTransport
from kamailio_exporter.observability.health_state import ExporterHealth, HealthSeries

logger = logging.getLogger(__name__)


@dataclass
class ScrapeResult:
    """Outcome of one scrape cycle."""

    samples: List[MetricSample] = field(default_factory=list)
    health_samples: List[HealthSeries] = field(default_factory=list)
    success: bool = False
    error: Optional[Exception] = None
    duration_seconds: float = 0.0

    @property
    def failed_method(self) -> str:
        return getattr(self.error, "method", "") or ""


@dataclass(frozen=True)
class _MethodPlan:
    method: str
    definitions: Tuple[MetricDefinition, ...]
    projector: Projector


class ScrapeOrchestrator:
    """Main orchestrator for the scrape workflow."""

    def __init__(
        self,
        transport: RpcTransport,
        catalog: MetricCatalogProtocol,
        config: ExporterConfig,
        health: Optional[ExporterHealth] = None,
        decoder: Optional[ResponseShapeDecoder] = None,
    ) -> None:
        """
        Initialize orchestrator with all dependencies.

        Args:
            transport: BINRPC transport
            catalog: Metric catalog
            config: Exporter configuration (methods, URI, timeout)
            health: Process-wide health state (created if omitted)
            decoder: Response decoder (created if omitted)

        Raises:
            InvalidConfiguration: If the URI or a method is invalid
        """
        self.transport = transport
        self.catalog = catalog
        self.config = config
        self.health = health or ExporterHealth()
        self.decoder = decoder or ResponseShapeDecoder()
        self._endpoint = config.endpoint()
        self._plans = [
            _MethodPlan(
                method=method,
                definitions=tuple(catalog.lookup(method)),
                projector=catalog.projector_for(method),
            )
            for method in config.methods
        ]
        self._lock = threading.Lock()

    @property
    def methods(self) -> List[str]:
        return [plan.method for plan in self._plans]

    def collect(self) -> ScrapeResult:
        """
        Run one scrape cycle.

        Holds the orchestrator lock from connect to the last sample, so
        at most one cycle is ever in flight.

        Returns:
            ScrapeResult with method samples (empty on failure) and the
            three health series
        """
        with self._lock:
            self.health.record_attempt()
            start_time = time.perf_counter()
            result = ScrapeResult()

            try:
                result.samples = self._scrape()
                result.success = True
            except ScrapeError as e:
                result.error = e
                logger.error(f"Scrape failed{_method_context(e)}: {e}")
            except Exception as e:
                result.error = e
                logger.exception(f"Unexpected scrape failure: {e}")

            result.duration_seconds = time.perf_counter() - start_time
            if result.success:
                if self.health.last_error is not None:
                    logger.info(
                        f"Scrape recovered after failure "
                        f"({self.health.last_scrape_duration_seconds:.3f}s): "
                        f"{self.health.last_error}"
                    )
                self.health.record_success(result.duration_seconds)
                logger.debug(
                    f"Scrape completed: {len(result.samples)} samples "
                    f"({result.duration_seconds:.3f}s)"
                )
            else:
                self.health.record_failure(result.error, result.duration_seconds)

            result.health_samples = self.health.series()
            return result

    def _scrape(self) -> List[MetricSample]:
        scheme, address = self._endpoint
        connection = self.transport.dial(scheme, address, self.config.timeout_seconds)

        try:
            samples: List[MetricSample] = []
            for plan in self._plans:
                samples.extend(self._scrape_method(connection, plan))
            return samples
        finally:
            self._close(connection)

    def _scrape_method(
        self,
        connection: RpcConnection,
        plan: _MethodPlan,
    ) -> List[MetricSample]:
        try:
            records = self.transport.call(connection, plan.method)
            root = self.decoder.decode(plan.method, records)
            projected = plan.projector.project(root)
        except ScrapeError as e:
            if not e.method:
                e.method = plan.method
            raise

        return self._bind(plan, projected)

    def _bind(self, plan: _MethodPlan, projected: ProjectedMetrics) -> List[MetricSample]:
        """Attach definitions, in catalog order; unknown names are dropped."""
        samples: List[MetricSample] = []
        for definition in plan.definitions:
            for value in projected.get(definition.name, []):
                samples.append(MetricSample.bind(definition, value))

        unknown = set(projected) - {d.name for d in plan.definitions}
        if unknown:
            logger.debug(f"{plan.method}: ignoring fields {sorted(unknown)}")

        return samples

    def _close(self, connection: RpcConnection) -> None:
        try:
            connection.close()
        except OSError as e:
            logger.warning(f"Error while closing connection: {e}")


def _method_context(error: ScrapeError) -> str:
    return f" for method {error.method}" if error.method else ""
