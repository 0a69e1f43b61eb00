"""
Command-Line Entry Point.

    kamailio-exporter --kamailio.scrape-uri tcp://127.0.0.1:2049 \
        --kamailio.methods tm.stats,sl.stats,dispatcher.list

Flags override values from ``--config``. Configuration is validated
before anything touches the network; an invalid configuration exits
with status 1.
"""

from __future__ import annotations

import argparse
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from prometheus_client import start_http_server

from kamailio_exporter import __version__, configure_logging
from kamailio_exporter.adapters.binrpc_transport import BinRpcTransport
from kamailio_exporter.adapters.prometheus_collector import build_registry
from kamailio_exporter.catalog.default_catalog import build_default_catalog
from kamailio_exporter.config.loader import load_config
from kamailio_exporter.config.models import ExporterConfig
from kamailio_exporter.domain.exceptions import InvalidConfiguration
from kamailio_exporter.pipeline.scrape_orchestrator import ScrapeOrchestrator
from kamailio_exporter.validation.config_validator import ConfigValidator

logger = logging.getLogger(__name__)

HEALTH_COUNTER_NOTE = (
    "Counters are exposed with a _total suffix: the scrape counters are "
    "kamailio_exporter_total_scrapes_total and "
    "kamailio_exporter_failed_scrapes_total (formerly without the suffix)."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kamailio-exporter",
        description="Prometheus exporter for Kamailio BINRPC statistics.",
        epilog=HEALTH_COUNTER_NOTE,
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        help="Address to listen on for telemetry (default :9494)",
    )
    parser.add_argument(
        "--kamailio.scrape-uri",
        dest="scrape_uri",
        help="URI on which to scrape kamailio, "
        "e.g. unix:/var/run/kamailio/kamailio_ctl or tcp://localhost:2049",
    )
    parser.add_argument(
        "--kamailio.timeout",
        dest="timeout_seconds",
        type=float,
        help="Timeout in seconds for one scrape",
    )
    parser.add_argument(
        "--kamailio.methods",
        dest="methods",
        help="Comma-separated list of methods to call",
    )
    parser.add_argument("--log.level", dest="log_level", help="Logging level")
    return parser


def split_listen_address(address: str) -> Tuple[str, int]:
    """':9494' -> ('', 9494), '127.0.0.1:9494' -> ('127.0.0.1', 9494)."""
    host, sep, port = address.rpartition(":")
    if not sep:
        raise InvalidConfiguration(
            f'invalid listen address "{address}": expected [host]:port',
            field="listen_address",
        )
    try:
        return host.strip("[]"), int(port)
    except ValueError as e:
        raise InvalidConfiguration(
            f'invalid listen address "{address}": {e}', field="listen_address"
        ) from e


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {
        "scrape_uri": args.scrape_uri,
        "timeout_seconds": args.timeout_seconds,
        "methods": args.methods,
        "log_level": args.log_level,
    }
    if args.listen_address:
        host, port = split_listen_address(args.listen_address)
        overrides["listen_address"] = host
        overrides["listen_port"] = port
    return overrides


def create_orchestrator(config: ExporterConfig) -> ScrapeOrchestrator:
    """
    Build the catalog, validate the configuration against it and wire
    the orchestrator to a BINRPC transport.

    Raises:
        InvalidConfiguration: If the configuration is invalid
    """
    catalog = build_default_catalog()
    ConfigValidator(catalog).validate(config)
    return ScrapeOrchestrator(BinRpcTransport(), catalog, config)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, overrides_from_args(args))
        configure_logging(logging.getLevelName(config.log_level))
        orchestrator = create_orchestrator(config)
    except InvalidConfiguration as e:
        logging.getLogger("kamailio_exporter").error(f"Invalid configuration: {e}")
        return 1
    except FileNotFoundError as e:
        logging.getLogger("kamailio_exporter").error(f"Configuration file not found: {e}")
        return 1

    registry = build_registry(orchestrator)
    start_http_server(config.listen_port, addr=config.listen_address, registry=registry)
    logger.info(
        f"Kamailio exporter {__version__} listening on "
        f"{config.listen_address or '0.0.0.0'}:{config.listen_port}, "
        f"scraping {config.scrape_uri} ({','.join(config.methods)})"
    )

    threading.Event().wait()
    return 0
