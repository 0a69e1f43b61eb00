"""
Core Domain Entities.

This module defines the metric model the exporter produces: the static
definitions held by the catalog and the samples bound to them on every
scrape.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field

NAMESPACE = "kamailio"


class MetricKind(str, Enum):
    """Prometheus value type of a metric."""

    GAUGE = "gauge"
    COUNTER = "counter"


class MetricDefinition(BaseModel):
    """A metric a query method can produce."""

    name: str = Field(..., description="Local metric name, e.g. 'created'")
    kind: MetricKind = Field(..., description="Gauge or counter")
    help: str = Field(..., description="Help text")
    method: str = Field(..., description="Kamailio method producing it")

    model_config = {"frozen": True}

    def exported_name(self) -> str:
        """
        Namespaced Prometheus name.

        Dots in the method become underscores and counters get a
        ``_total`` suffix:

            kamailio_tm_stats_current
            kamailio_tm_stats_created_total
            kamailio_sl_stats_codes_total
        """
        suffix = self.name
        if self.kind == MetricKind.COUNTER:
            suffix = f"{self.name}_total"
        return f"{NAMESPACE}_{self.method.replace('.', '_')}_{suffix}"


def gauge(name: str, help: str, method: str) -> MetricDefinition:
    """Shorthand for a gauge definition."""
    return MetricDefinition(name=name, kind=MetricKind.GAUGE, help=help, method=method)


def counter(name: str, help: str, method: str) -> MetricDefinition:
    """Shorthand for a counter definition."""
    return MetricDefinition(name=name, kind=MetricKind.COUNTER, help=help, method=method)


class MetricValue(BaseModel):
    """A projected value with its labels, not yet bound to a definition."""

    value: float
    labels: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def label_keys(self) -> List[str]:
        """Label keys in canonical (sorted) order."""
        return sorted(self.labels)

    def label_values(self) -> List[str]:
        """Label values, aligned with label_keys()."""
        return [self.labels[key] for key in self.label_keys()]


class MetricSample(BaseModel):
    """A value bound to its definition, ready for the sink."""

    definition: MetricDefinition
    value: float
    labels: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @classmethod
    def bind(cls, definition: MetricDefinition, value: MetricValue) -> "MetricSample":
        return cls(definition=definition, value=value.value, labels=dict(value.labels))

    @property
    def name(self) -> str:
        return self.definition.exported_name()

    @property
    def kind(self) -> MetricKind:
        return self.definition.kind

    @property
    def help(self) -> str:
        return self.definition.help

    @property
    def label_keys(self) -> List[str]:
        return sorted(self.labels)

    @property
    def label_values(self) -> List[str]:
        return [self.labels[key] for key in self.label_keys]
