"""
Validation Package - Startup Configuration Checks.
"""

from kamailio_exporter.validation.config_validator import ConfigValidator

__all__ = ["ConfigValidator"]
