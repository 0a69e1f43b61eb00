"""
Catalog Module - Supported Methods and Their Metrics.

Components:
    - MetricCatalog: Registry of methods, definitions and projectors
    - build_default_catalog: Catalog of every supported method
"""

from kamailio_exporter.catalog.default_catalog import build_default_catalog
from kamailio_exporter.catalog.metric_catalog import (
    MetricCatalog,
    MetricCatalogProtocol,
)

__all__ = [
    "MetricCatalog",
    "MetricCatalogProtocol",
    "build_default_catalog",
]
