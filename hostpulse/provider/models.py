"""
Provider Models - payloads produced by node polls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class VolumeInfo:
    """A mounted volume."""

    name: str
    mountpoint: str
    fstype: str
    total_bytes: int


@dataclass
class InterfaceInfo:
    """A network interface."""

    name: str
    addresses: list[str] = field(default_factory=list)
    is_up: bool = False
    speed_mbps: int = 0


@dataclass
class NodeInfo:
    """Static inventory of a host (slow-changing)."""

    hostname: str
    os_name: str = ""
    os_version: str = ""
    architecture: str = ""
    cpu_count: int = 0
    memory_total_bytes: int = 0
    boot_time: datetime | None = None
    volumes: list[VolumeInfo] = field(default_factory=list)
    interfaces: list[InterfaceInfo] = field(default_factory=list)


@dataclass(frozen=True)
class CounterSample:
    """
    Raw counters read from a host at one instant.

    CPU, network and disk values are cumulative since boot; utilization is
    only meaningful as the delta between two samples.
    """

    timestamp: float
    cpu_busy_seconds: float
    cpu_total_seconds: float
    memory_used_bytes: int = 0
    memory_total_bytes: int = 0
    net_bytes_recv: int = 0
    net_bytes_sent: int = 0
    disk_bytes_read: int = 0
    disk_bytes_written: int = 0


@dataclass(frozen=True)
class NodeStats:
    """Utilization derived from two consecutive samples."""

    cpu_percent: float
    memory_percent: float
    net_recv_bytes_per_sec: float
    net_sent_bytes_per_sec: float
    disk_read_bytes_per_sec: float
    disk_write_bytes_per_sec: float
    interval_seconds: float
