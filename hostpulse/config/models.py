"""
HostPulse Config - Configuration models.

Pydantic models for type-safe configuration.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from hostpulse.config.constants import (
    CONFIG_DIR,
    DEFAULT_DYNAMIC_DATA_TIMEOUT,
    DEFAULT_QUERY_TIMEOUT,
    DEFAULT_STATIC_DATA_TIMEOUT,
)


class DashboardConfig(BaseModel):
    """Settings shared by every provider on the dashboard."""

    exclude_pattern: str | None = Field(
        default=None, description="Regex of host names to hide from all providers"
    )

    @field_validator("exclude_pattern")
    @classmethod
    def _check_pattern(cls, value: str | None) -> str | None:
        if not value:
            return None
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid exclude_pattern {value!r}: {e}") from e
        return value

    @property
    def exclude_pattern_regex(self) -> re.Pattern[str] | None:
        """Compiled exclusion pattern, or None to exclude nothing."""
        if not self.exclude_pattern:
            return None
        return re.compile(self.exclude_pattern, re.IGNORECASE)


class HostProviderConfig(BaseModel):
    """Host provider settings."""

    name: str = Field(default="hosts", description="Provider display name")
    nodes: list[str] = Field(default_factory=list, description="Host names to monitor")
    static_data_timeout_seconds: int = Field(
        default=DEFAULT_STATIC_DATA_TIMEOUT, ge=1, description="Inventory refresh interval"
    )
    dynamic_data_timeout_seconds: int = Field(
        default=DEFAULT_DYNAMIC_DATA_TIMEOUT, ge=1, description="Utilization refresh interval"
    )
    query_timeout_seconds: float = Field(
        default=DEFAULT_QUERY_TIMEOUT, gt=0, description="Timeout for a single fetch"
    )

    @field_validator("nodes", mode="before")
    @classmethod
    def _empty_nodes(cls, value: object) -> object:
        # A bare "nodes:" key in YAML loads as None
        return [] if value is None else value

    @field_validator("nodes")
    @classmethod
    def _strip_nodes(cls, value: list[str]) -> list[str]:
        return [n.strip() for n in value if n and n.strip()]


class LoggingConfig(BaseModel):
    """Logging settings."""

    console_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info", description="Console log level"
    )
    file_level: Literal["debug", "info", "warning", "error"] = Field(
        default="debug", description="File log level"
    )
    log_dir: str = Field(default=str(CONFIG_DIR / "logs"), description="Log directory")
    app_log_name: str = Field(default="hostpulse.log", description="Log file name")
    json_logs: bool = Field(default=False, description="Write file logs as JSON lines")
    rotation: str = Field(default="10 MB", description="Rotation size or interval")
    retention: str = Field(default="7 days", description="How long to keep old logs")


class Config(BaseModel):
    """Root configuration."""

    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    provider: HostProviderConfig = Field(default_factory=HostProviderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
