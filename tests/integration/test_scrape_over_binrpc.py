"""
Integration Tests for full scrape cycles over a BINRPC socket.

Test Aspects Covered:
    ✅ Integration: Transport, decoder, projectors and catalog together
    ✅ Error Handling: Remote errors, unreachable server
    ✅ Business Logic: One connection per cycle, health counters
"""

from __future__ import annotations

import re

import pytest

from kamailio_exporter.adapters.binrpc_transport import BinRpcTransport
from kamailio_exporter.catalog.default_catalog import build_default_catalog
from kamailio_exporter.config.models import ExporterConfig
from kamailio_exporter.domain.exceptions import RemoteError, TransportError
from kamailio_exporter.pipeline.scrape_orchestrator import ScrapeOrchestrator
from kamailio_exporter.validation.config_validator import ConfigValidator

NAME_PATTERN = re.compile(r"^kamailio_[a-z0-9_]+$")

ALL_METHODS = build_default_catalog().available_methods()


def build_orchestrator(uri: str, methods, timeout: float = 2.0) -> ScrapeOrchestrator:
    catalog = build_default_catalog()
    config = ExporterConfig(scrape_uri=uri, methods=methods, timeout_seconds=timeout)
    ConfigValidator(catalog).validate(config)
    return ScrapeOrchestrator(BinRpcTransport(), catalog, config)


def health_values(result) -> dict:
    return {s.name: s.value for s in result.health_samples}


class TestScrapeOverTcp:
    """Full cycles against a tcp control socket."""

    def test_core_uptime(self, tcp_kamailio) -> None:
        """
        SCENARIO: methods=[core.uptime], uptime 12345
        EXPECTED: kamailio_core_uptime_uptime_total=12345, up=1
        """
        # Arrange
        orchestrator = build_orchestrator(tcp_kamailio.uri, ["core.uptime"])

        # Act
        result = orchestrator.collect()

        # Assert
        assert result.success, result.error
        assert [(s.name, s.value) for s in result.samples] == [
            ("kamailio_core_uptime_uptime_total", 12345)
        ]
        assert health_values(result) == {
            "kamailio_up": 1,
            "kamailio_exporter_total_scrapes": 1,
            "kamailio_exporter_failed_scrapes": 0,
        }

    def test_every_method(self, tcp_kamailio) -> None:
        """
        SCENARIO: All nine methods on one connection
        EXPECTED: Success, methods called in order, well-formed names
        """
        orchestrator = build_orchestrator(tcp_kamailio.uri, ALL_METHODS)

        result = orchestrator.collect()

        assert result.success, result.error
        assert tcp_kamailio.requests == ALL_METHODS
        assert tcp_kamailio.connections == 1
        for sample in result.samples:
            assert NAME_PATTERN.match(sample.name), sample.name

        by_name = {}
        for sample in result.samples:
            by_name.setdefault(sample.name, []).append(sample)
        assert by_name["kamailio_tm_stats_current"][0].value == 1
        assert len(by_name["kamailio_tm_stats_codes_total"]) == 5
        assert len(by_name["kamailio_dispatcher_list_target"]) == 2
        assert by_name["kamailio_dlg_stats_active_all"][0].value == 1338
        assert [s.labels["status"] for s in by_name["kamailio_dmq_list_nodes_peer"]] == [
            "active",
            "pending",
        ]

    def test_same_state_same_samples(self, tcp_kamailio) -> None:
        orchestrator = build_orchestrator(tcp_kamailio.uri, ALL_METHODS)

        first = orchestrator.collect()
        second = orchestrator.collect()

        assert first.samples == second.samples
        assert tcp_kamailio.connections == 2

    def test_remote_error_aborts_cycle(self, tcp_kamailio) -> None:
        """
        SCENARIO: tm.stats is not loaded on the server
        EXPECTED: Fault reply surfaces as RemoteError, no samples, up=0
        """
        # Arrange
        del tcp_kamailio.responses["tm.stats"]
        orchestrator = build_orchestrator(tcp_kamailio.uri, ["core.uptime", "tm.stats", "sl.stats"])

        # Act
        result = orchestrator.collect()

        # Assert
        assert isinstance(result.error, RemoteError)
        assert result.error.code == 500
        assert result.error.message == "command not found"
        assert result.failed_method == "tm.stats"
        assert result.samples == []
        assert tcp_kamailio.requests == ["core.uptime", "tm.stats"]
        assert health_values(result)["kamailio_up"] == 0
        assert health_values(result)["kamailio_exporter_failed_scrapes"] == 1

    def test_recovers_on_next_cycle(self, tcp_kamailio) -> None:
        saved = tcp_kamailio.responses.pop("core.uptime")
        orchestrator = build_orchestrator(tcp_kamailio.uri, ["core.uptime"])
        assert not orchestrator.collect().success

        tcp_kamailio.responses["core.uptime"] = saved
        result = orchestrator.collect()

        assert result.success
        assert health_values(result) == {
            "kamailio_up": 1,
            "kamailio_exporter_total_scrapes": 2,
            "kamailio_exporter_failed_scrapes": 1,
        }


class TestScrapeOverUnixSocket:
    """Full cycles against a unix control socket."""

    def test_default_methods(self, unix_kamailio) -> None:
        orchestrator = build_orchestrator(
            unix_kamailio.uri, ["tm.stats", "sl.stats", "core.shmmem", "core.uptime"]
        )

        result = orchestrator.collect()

        assert result.success, result.error
        assert unix_kamailio.requests == ["tm.stats", "sl.stats", "core.shmmem", "core.uptime"]


class TestUnreachableServer:
    """Scrapes against nothing."""

    def test_connection_refused_counts_failure(self, tcp_kamailio) -> None:
        uri = tcp_kamailio.uri
        tcp_kamailio.stop()
        orchestrator = build_orchestrator(uri, ["core.uptime"], timeout=0.5)

        result = orchestrator.collect()

        assert isinstance(result.error, TransportError)
        assert health_values(result) == {
            "kamailio_up": 0,
            "kamailio_exporter_total_scrapes": 1,
            "kamailio_exporter_failed_scrapes": 1,
        }

    @pytest.mark.parametrize("methods", [["core.uptime"], ALL_METHODS])
    def test_missing_unix_socket(self, tmp_path, methods) -> None:
        orchestrator = build_orchestrator(f"unix:{tmp_path}/absent_ctl", methods)

        result = orchestrator.collect()

        assert not result.success
        assert result.samples == []
