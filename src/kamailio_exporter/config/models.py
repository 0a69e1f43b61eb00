"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic. Method names
are checked against the catalog separately (see validation), since the
catalog is built at runtime.
"""

from __future__ import annotations

import logging
from typing import Any, List, Tuple
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator

from kamailio_exporter.domain.exceptions import InvalidConfiguration

DEFAULT_SCRAPE_URI = "unix:/var/run/kamailio/kamailio_ctl"
DEFAULT_METHODS = ("tm.stats", "sl.stats", "core.shmmem", "core.uptime")
DEFAULT_LISTEN_PORT = 9494


def parse_scrape_uri(uri: str) -> Tuple[str, str]:
    """
    Split a scrape URI into a dial scheme and address.

        unix:/var/run/kamailio/kamailio_ctl -> ("unix", "/var/run/kamailio/kamailio_ctl")
        unix:///tmp/kamailio_ctl            -> ("unix", "/tmp/kamailio_ctl")
        tcp://localhost:2049                -> ("tcp", "localhost:2049")

    Raises:
        InvalidConfiguration: If the URI has another scheme or lacks
            a path (unix) or host and port (tcp)
    """
    parts = urlsplit(uri)

    if parts.scheme == "unix":
        if not parts.path:
            raise InvalidConfiguration(
                f'cannot parse URI "{uri}": missing socket path', field="scrape_uri"
            )
        return "unix", parts.path

    if parts.scheme == "tcp":
        try:
            port = parts.port
        except ValueError as e:
            raise InvalidConfiguration(
                f'cannot parse URI "{uri}": {e}', field="scrape_uri"
            ) from e
        if not parts.hostname or port is None:
            raise InvalidConfiguration(
                f'cannot parse URI "{uri}": expected tcp://host:port',
                field="scrape_uri",
            )
        return "tcp", parts.netloc

    raise InvalidConfiguration(
        f'cannot parse URI "{uri}": scheme must be "unix" or "tcp"',
        field="scrape_uri",
    )


class ExporterConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    scrape_uri: str = Field(default=DEFAULT_SCRAPE_URI)
    timeout_seconds: float = Field(default=5.0, gt=0)
    methods: List[str] = Field(default_factory=lambda: list(DEFAULT_METHODS))
    listen_address: str = Field(default="")
    listen_port: int = Field(default=DEFAULT_LISTEN_PORT, ge=0, le=65535)
    log_level: str = Field(default="INFO")

    model_config = {"frozen": True}

    @field_validator("methods", mode="before")
    @classmethod
    def _split_methods(cls, value: Any) -> Any:
        # "tm.stats,sl.stats" is accepted as well as a list
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            return [str(m).strip() for m in value if str(m).strip()]
        return value

    @field_validator("methods")
    @classmethod
    def _require_methods(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one method is required")
        return value

    @field_validator("scrape_uri")
    @classmethod
    def _check_scrape_uri(cls, value: str) -> str:
        try:
            parse_scrape_uri(value)
        except InvalidConfiguration as e:
            raise ValueError(e.message) from e
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    def endpoint(self) -> Tuple[str, str]:
        """(scheme, address) to dial."""
        return parse_scrape_uri(self.scrape_uri)
