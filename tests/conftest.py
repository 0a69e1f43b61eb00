"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List

import pytest

from kamailio_exporter.adapters.mock_transport import MockTransport, sample_responses
from kamailio_exporter.catalog.default_catalog import build_default_catalog
from kamailio_exporter.catalog.metric_catalog import MetricCatalog
from kamailio_exporter.config.models import ExporterConfig
from kamailio_exporter.domain.value_objects import Record
from kamailio_exporter.observability.health_state import ExporterHealth
from kamailio_exporter.pipeline.scrape_orchestrator import ScrapeOrchestrator

ALL_METHODS = [
    "tm.stats",
    "sl.stats",
    "core.shmmem",
    "core.uptime",
    "core.tcp_info",
    "dispatcher.list",
    "tls.info",
    "dlg.stats_active",
    "dmq.list_nodes",
]


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def catalog() -> MetricCatalog:
    """Catalog with every supported method."""
    return build_default_catalog()


@pytest.fixture
def responses() -> Dict[str, List[Record]]:
    """Canned replies for every supported method."""
    return sample_responses()


@pytest.fixture
def mock_transport() -> MockTransport:
    """Create mock transport answering with the canned replies."""
    return MockTransport()


@pytest.fixture
def default_config() -> ExporterConfig:
    """Default exporter configuration over a tcp socket."""
    return ExporterConfig(scrape_uri="tcp://127.0.0.1:2049")


@pytest.fixture
def full_config() -> ExporterConfig:
    """Configuration calling every supported method."""
    return ExporterConfig(scrape_uri="tcp://127.0.0.1:2049", methods=ALL_METHODS)


@pytest.fixture
def health() -> ExporterHealth:
    """Fresh health state."""
    return ExporterHealth()


@pytest.fixture
def make_orchestrator(
    catalog: MetricCatalog,
    mock_transport: MockTransport,
    health: ExporterHealth,
) -> Callable[..., ScrapeOrchestrator]:
    """Factory for orchestrators sharing the catalog, transport and health."""

    def _make(methods: List[str], **kwargs) -> ScrapeOrchestrator:
        config = ExporterConfig(
            scrape_uri=kwargs.pop("scrape_uri", "tcp://127.0.0.1:2049"),
            methods=methods,
            **kwargs,
        )
        return ScrapeOrchestrator(mock_transport, catalog, config, health=health)

    return _make

