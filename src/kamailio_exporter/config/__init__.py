"""
Configuration Package - Models and Loaders.

    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - Command-line overrides merged over the file

Configuration Structure:
    - ExporterConfig: scrape URI, timeout, methods, listen address

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast, before any network activity)
"""

from kamailio_exporter.config.loader import ConfigLoader, load_config
from kamailio_exporter.config.models import ExporterConfig, parse_scrape_uri

__all__ = ["ConfigLoader", "ExporterConfig", "load_config", "parse_scrape_uri"]
