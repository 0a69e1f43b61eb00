"""
Config Validator - Validate the Exporter Configuration Against the Catalog.

Runs once at startup, before the first scrape:
    - Scrape URI parses to a dialable endpoint
    - Every configured method is supported by the catalog
    - No method is configured twice

Design Notes:
    - Fail-fast principle
    - All problems reported in one message
"""

from __future__ import annotations

import logging
from typing import List

from kamailio_exporter.catalog.metric_catalog import MetricCatalogProtocol
from kamailio_exporter.config.models import ExporterConfig, parse_scrape_uri
from kamailio_exporter.domain.exceptions import InvalidConfiguration

logger = logging.getLogger(__name__)


class ConfigValidator:
    """Validates an ExporterConfig before any network activity."""

    def __init__(self, catalog: MetricCatalogProtocol) -> None:
        """
        Initialize config validator.

        Args:
            catalog: Catalog the configured methods must belong to
        """
        self.catalog = catalog

    def validate(self, config: ExporterConfig) -> None:
        """
        Validate a configuration.

        Raises:
            InvalidConfiguration: If validation fails
        """
        errors: List[str] = []

        try:
            parse_scrape_uri(config.scrape_uri)
        except InvalidConfiguration as e:
            errors.append(e.message)

        errors.extend(self._validate_methods(config.methods))

        if errors:
            error_message = "; ".join(errors)
            logger.error(f"Configuration validation failed: {error_message}")
            raise InvalidConfiguration(error_message)

        logger.debug(
            f"Configuration validated: uri={config.scrape_uri}, "
            f"methods={config.methods}"
        )

    def _validate_methods(self, methods: List[str]) -> List[str]:
        errors: List[str] = []
        available = ",".join(self.catalog.available_methods())

        for method in methods:
            if not self.catalog.is_supported(method):
                errors.append(
                    f'invalid method "{method}". available methods are: {available}.'
                )

        duplicates = sorted({m for m in methods if methods.count(m) > 1})
        if duplicates:
            errors.append(f"methods configured more than once: {duplicates}")

        return errors
