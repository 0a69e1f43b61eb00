"""
Observability Package - Exporter Self-Health.

Components:
    - ExporterHealth: Scrape attempt/failure counters and up flag
    - HealthSeries: One health series as handed to the sink
"""

from kamailio_exporter.observability.health_state import ExporterHealth, HealthSeries

__all__ = ["ExporterHealth", "HealthSeries"]
