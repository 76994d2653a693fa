"""
HostPulse Core - Shared types and enums.
"""

from __future__ import annotations

from enum import StrEnum


class NodeStatus(StrEnum):
    """Reachability of a node, derived from name resolution only."""

    ACTIVE = "active"
    UNREACHABLE = "unreachable"
    UNKNOWN = "unknown"


class CacheKind(StrEnum):
    """Cadence of a node's polling cache."""

    STATIC = "static"    # Inventory: OS, volumes, interfaces
    DYNAMIC = "dynamic"  # Utilization: CPU, memory, throughput


class MonitorStatus(StrEnum):
    """Aggregate monitor status levels."""

    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"
    MAINTENANCE = "maintenance"
    UNKNOWN = "unknown"
