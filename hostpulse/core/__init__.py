"""
HostPulse Core - Shared types and exceptions.
"""

from hostpulse.core.exceptions import (
    CollectorError,
    ConfigError,
    HostPulseError,
    PollTimeoutError,
    ProviderNotReadyError,
)
from hostpulse.core.types import CacheKind, MonitorStatus, NodeStatus

__all__ = [
    "CacheKind",
    "CollectorError",
    "ConfigError",
    "HostPulseError",
    "MonitorStatus",
    "NodeStatus",
    "PollTimeoutError",
    "ProviderNotReadyError",
]
