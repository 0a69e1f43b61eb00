"""
Unit Tests for ExporterHealth.

Tests:
    - Counters across success and failure
    - Series names, kinds and help texts
    - Last error and duration
"""

from __future__ import annotations

from kamailio_exporter.domain.entities import MetricKind
from kamailio_exporter.observability.health_state import ExporterHealth


class TestExporterHealth:
    """Tests for scrape counters."""

    def test_initial_state(self) -> None:
        health = ExporterHealth()

        assert [s.value for s in health.series()] == [0, 0, 0]

    def test_success(self) -> None:
        health = ExporterHealth()

        health.record_attempt()
        health.record_success(0.01)

        assert health.up == 1
        assert health.total_scrapes == 1
        assert health.failed_scrapes == 0

    def test_failure_then_success(self) -> None:
        """
        SCENARIO: One failed cycle followed by a good one
        EXPECTED: up back to 1, failed count kept
        """
        health = ExporterHealth()

        health.record_attempt()
        health.record_failure(RuntimeError("boom"), 0.02)
        assert health.up == 0
        assert health.last_error == "boom"

        health.record_attempt()
        health.record_success(0.01)

        assert health.up == 1
        assert health.total_scrapes == 2
        assert health.failed_scrapes == 1
        assert health.last_error is None

    def test_series_shape(self) -> None:
        series = ExporterHealth().series()

        assert [(s.name, s.kind) for s in series] == [
            ("kamailio_up", MetricKind.GAUGE),
            ("kamailio_exporter_total_scrapes", MetricKind.COUNTER),
            ("kamailio_exporter_failed_scrapes", MetricKind.COUNTER),
        ]
        assert series[0].help == "Was the last scrape successful."
        assert all(s.label_keys == [] for s in series)


    def test_failure_keeps_error_and_duration(self) -> None:
        health = ExporterHealth()
        health.record_attempt()

        health.record_failure(ValueError("bad"), 0.5)

        assert health.last_error == "bad"
        assert health.last_scrape_duration_seconds == 0.5
