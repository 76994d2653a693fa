"""
Collectors - how a node's static and dynamic data is fetched.

The provider only needs the NodeCollector interface. LocalCollector reads
the machine the provider runs on through psutil; remote protocols plug in
by implementing the same two coroutines.
"""

from __future__ import annotations

import asyncio
import ipaddress
import platform
import socket
import time
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import psutil
from loguru import logger

from hostpulse.core.exceptions import CollectorError
from hostpulse.provider.models import CounterSample, InterfaceInfo, NodeInfo, VolumeInfo

if TYPE_CHECKING:
    from hostpulse.provider.node import HostNode


@runtime_checkable
class NodeCollector(Protocol):
    """
    Protocol for data collectors.

    Both coroutines raise on failure; the polling cache records the error.
    """

    async def collect_info(self, node: HostNode) -> NodeInfo:
        """Fetch static inventory for a node."""
        ...

    async def collect_sample(self, node: HostNode) -> CounterSample:
        """Fetch one raw counter sample for a node."""
        ...


def _is_local(node: HostNode) -> bool:
    names = {"localhost", socket.gethostname().lower(), socket.getfqdn().lower()}
    if node.name.lower() in names:
        return True
    if node.ip:
        try:
            return ipaddress.ip_address(node.ip).is_loopback
        except ValueError:
            return False
    return False


class LocalCollector:
    """
    psutil-backed collector for the local machine.

    Nodes that do not refer to this machine (by name or loopback address)
    are rejected with CollectorError.
    """

    def _require_local(self, node: HostNode) -> None:
        if not _is_local(node):
            raise CollectorError(node.name, "not the local machine")

    async def collect_info(self, node: HostNode) -> NodeInfo:
        self._require_local(node)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_info, node.name)

    async def collect_sample(self, node: HostNode) -> CounterSample:
        self._require_local(node)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_sample)

    @staticmethod
    def _read_info(hostname: str) -> NodeInfo:
        volumes = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError as e:
                # Unmounted media, permission denied
                logger.debug(f"Skipping volume {part.mountpoint}: {e}")
                continue
            volumes.append(VolumeInfo(
                name=part.device,
                mountpoint=part.mountpoint,
                fstype=part.fstype,
                total_bytes=usage.total,
            ))

        stats = psutil.net_if_stats()
        interfaces = [
            InterfaceInfo(
                name=name,
                addresses=[a.address for a in addrs if a.family in (socket.AF_INET, socket.AF_INET6)],
                is_up=stats[name].isup if name in stats else False,
                speed_mbps=stats[name].speed if name in stats else 0,
            )
            for name, addrs in sorted(psutil.net_if_addrs().items())
        ]

        return NodeInfo(
            hostname=hostname,
            os_name=platform.system(),
            os_version=platform.release(),
            architecture=platform.machine(),
            cpu_count=psutil.cpu_count() or 0,
            memory_total_bytes=psutil.virtual_memory().total,
            boot_time=datetime.fromtimestamp(psutil.boot_time()),
            volumes=volumes,
            interfaces=interfaces,
        )

    @staticmethod
    def _read_sample() -> CounterSample:
        cpu = psutil.cpu_times()
        # guest time is already counted in user time on Linux
        total = sum(cpu) - getattr(cpu, "guest", 0.0) - getattr(cpu, "guest_nice", 0.0)
        idle = cpu.idle + getattr(cpu, "iowait", 0.0)
        mem = psutil.virtual_memory()
        net = psutil.net_io_counters()
        disk = psutil.disk_io_counters()

        return CounterSample(
            timestamp=time.monotonic(),
            cpu_busy_seconds=total - idle,
            cpu_total_seconds=total,
            memory_used_bytes=mem.total - mem.available,
            memory_total_bytes=mem.total,
            net_bytes_recv=net.bytes_recv if net else 0,
            net_bytes_sent=net.bytes_sent if net else 0,
            disk_bytes_read=disk.read_bytes if disk else 0,
            disk_bytes_written=disk.write_bytes if disk else 0,
        )
