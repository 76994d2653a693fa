"""
Host Node - the per-host entity.

A node carries its identity, resolved address, reachability and exactly
two polling caches (static first, dynamic second) once the registry has
built it. The poll functions bound into those caches live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from hostpulse.core.types import CacheKind, NodeStatus
from hostpulse.provider.cache import PollingCache
from hostpulse.provider.collector import NodeCollector
from hostpulse.provider.counters import compute_stats
from hostpulse.provider.models import CounterSample, NodeInfo, NodeStats


@dataclass(eq=False)
class HostNode:
    """A monitored host."""

    id: str
    collector: NodeCollector = field(repr=False)
    ip: str | None = None
    status: NodeStatus = NodeStatus.UNKNOWN
    caches: list[PollingCache] = field(default_factory=list, repr=False)

    info: NodeInfo | None = field(default=None, repr=False)
    stats: NodeStats | None = field(default=None, repr=False)
    last_sample: CounterSample | None = field(default=None, repr=False)

    @property
    def name(self) -> str:
        """Display name (the configured host name)."""
        return self.id

    @property
    def endpoint(self) -> str:
        """Sort key: resolved address, empty when unresolved."""
        return self.ip or ""

    def _cache(self, kind: CacheKind) -> PollingCache | None:
        for cache in self.caches:
            if cache.kind == kind:
                return cache
        return None

    @property
    def static_cache(self) -> PollingCache | None:
        return self._cache(CacheKind.STATIC)

    @property
    def dynamic_cache(self) -> PollingCache | None:
        return self._cache(CacheKind.DYNAMIC)

    @property
    def has_data(self) -> bool:
        return any(c.has_data for c in self.caches)

    async def poll_node_info(self) -> NodeInfo:
        """Fetch static inventory (OS, volumes, interfaces)."""
        info = await self.collector.collect_info(self)
        self.info = info
        return info

    async def poll_stats(self) -> CounterSample:
        """
        Fetch a raw counter sample and derive utilization.

        The first sample only establishes the baseline; stats stay None
        until a second sample arrives.
        """
        sample = await self.collector.collect_sample(self)
        if self.last_sample is not None:
            self.stats = compute_stats(self.last_sample, sample)
        else:
            logger.debug(f"Baseline sample recorded for {self.id}")
        self.last_sample = sample
        return sample

    def to_dict(self) -> dict[str, Any]:
        """Summary for display and JSON output."""
        return {
            "id": self.id,
            "ip": self.ip,
            "status": str(self.status),
            "os": f"{self.info.os_name} {self.info.os_version}".strip() if self.info else None,
            "cpu_percent": self.stats.cpu_percent if self.stats else None,
            "memory_percent": self.stats.memory_percent if self.stats else None,
            "pollers": [c.to_dict() for c in self.caches],
        }
