"""
Exporter Health State - Scrape Success and Failure Counters.

Tracks the three series every collection pass reports about the
exporter itself:
    - kamailio_up: 1 if the last scrape succeeded
    - kamailio_exporter_total_scrapes: scrapes attempted
    - kamailio_exporter_failed_scrapes: scrapes that failed

Design Notes:
    - One instance per process, built at startup
    - Mutated only by the orchestrator while it holds its lock
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from kamailio_exporter.domain.entities import NAMESPACE, MetricKind


@dataclass(frozen=True)
class HealthSeries:
    """One exporter health series, shaped like a MetricSample."""

    name: str
    kind: MetricKind
    help: str
    value: float
    label_keys: List[str] = field(default_factory=list)
    label_values: List[str] = field(default_factory=list)


@dataclass
class ExporterHealth:
    """Process-lifetime scrape counters."""

    up: int = 0
    total_scrapes: int = 0
    failed_scrapes: int = 0
    last_error: Optional[str] = None
    last_scrape_duration_seconds: float = 0.0

    def record_attempt(self) -> None:
        self.total_scrapes += 1

    def record_success(self, duration_seconds: float) -> None:
        self.up = 1
        self.last_error = None
        self.last_scrape_duration_seconds = duration_seconds

    def record_failure(self, error: Exception, duration_seconds: float) -> None:
        self.up = 0
        self.failed_scrapes += 1
        self.last_error = str(error)
        self.last_scrape_duration_seconds = duration_seconds

    def series(self) -> List[HealthSeries]:
        """The three health series, in emission order."""
        return [
            HealthSeries(
                name=f"{NAMESPACE}_up",
                kind=MetricKind.GAUGE,
                help="Was the last scrape successful.",
                value=float(self.up),
            ),
            HealthSeries(
                name=f"{NAMESPACE}_exporter_total_scrapes",
                kind=MetricKind.COUNTER,
                help="Number of total kamailio scrapes",
                value=float(self.total_scrapes),
            ),
            HealthSeries(
                name=f"{NAMESPACE}_exporter_failed_scrapes",
                kind=MetricKind.COUNTER,
                help="Number of failed kamailio scrapes",
                value=float(self.failed_scrapes),
            ),
        ]

