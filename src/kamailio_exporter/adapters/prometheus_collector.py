"""
Prometheus Collector.

Bridges the scrape orchestrator to prometheus_client: every collection
pass of the registry runs one scrape cycle and yields one metric family
per exported name, followed by the exporter health families.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Union

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from kamailio_exporter.domain.entities import MetricKind, MetricSample
from kamailio_exporter.pipeline.scrape_orchestrator import ScrapeOrchestrator

logger = logging.getLogger(__name__)

Family = Union[CounterMetricFamily, GaugeMetricFamily]


def new_family(name: str, kind: MetricKind, help: str, label_keys: Sequence[str]) -> Family:
    """Empty metric family of the right type."""
    if kind == MetricKind.COUNTER:
        return CounterMetricFamily(name, help, labels=list(label_keys))
    return GaugeMetricFamily(name, help, labels=list(label_keys))


class KamailioCollector:
    """Custom prometheus_client collector backed by a ScrapeOrchestrator."""

    def __init__(self, orchestrator: ScrapeOrchestrator) -> None:
        self.orchestrator = orchestrator

    def describe(self) -> List[Metric]:
        # Registering must not trigger a scrape
        return []

    def collect(self) -> Iterator[Metric]:
        result = self.orchestrator.collect()

        families: Dict[str, Family] = {}
        for sample in result.samples:
            self._add(families, sample)
        yield from families.values()

        for series in result.health_samples:
            family = new_family(series.name, series.kind, series.help, series.label_keys)
            family.add_metric(series.label_values, series.value)
            yield family

    def _add(self, families: Dict[str, Family], sample: MetricSample) -> None:
        family = families.get(sample.name)
        if family is None:
            family = new_family(sample.name, sample.kind, sample.help, sample.label_keys)
            families[sample.name] = family
        family.add_metric(sample.label_values, sample.value)


def build_registry(
    orchestrator: ScrapeOrchestrator,
    registry: Optional[CollectorRegistry] = None,
) -> CollectorRegistry:
    """Register a KamailioCollector on a (new) registry."""
    registry = registry or CollectorRegistry()
    registry.register(KamailioCollector(orchestrator))
    return registry


def render(registry: CollectorRegistry) -> str:
    """Text exposition of a registry."""
    return generate_latest(registry).decode("utf-8")
