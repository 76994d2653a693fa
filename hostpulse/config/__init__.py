"""
HostPulse Config - Configuration management.
"""

from hostpulse.config.loader import load_config, parse_config, resolve_config_path
from hostpulse.config.models import (
    Config,
    DashboardConfig,
    HostProviderConfig,
    LoggingConfig,
)

__all__ = [
    "Config",
    "DashboardConfig",
    "HostProviderConfig",
    "LoggingConfig",
    "load_config",
    "parse_config",
    "resolve_config_path",
]
