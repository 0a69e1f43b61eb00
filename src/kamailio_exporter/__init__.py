"""
Kamailio Exporter - BINRPC to Prometheus Metrics Bridge.

Polls a Kamailio SIP server over its BINRPC control socket, decodes the
nested responses of each query method and re-projects them into flat,
typed Prometheus metrics.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Registry of per-method projectors selected at catalog-build time
    - Configuration-driven behavior via YAML and command-line flags

Main Components:
    - domain: Metric model, wire records, decoded field tree, errors
    - catalog: Per-method metric definitions and projector registry
    - decoding: Response shape decoder (records -> field tree)
    - projectors: Method-family specific projection policies
    - pipeline: Scrape orchestrator (one cycle per collection pass)
    - adapters: BINRPC transport, canned transport, Prometheus collector
    - config: Configuration models and loaders

Example:
    >>> from kamailio_exporter.catalog import build_default_catalog
    >>> catalog = build_default_catalog()
    >>> [d.exported_name() for d in catalog.lookup("core.uptime")]
    ['kamailio_core_uptime_uptime_total']

"""

import logging

__version__ = "0.4.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for the exporter.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import kamailio_exporter
        >>> kamailio_exporter.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("kamailio_exporter").setLevel(level)
