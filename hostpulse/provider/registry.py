"""
Node Registry - builds the monitored node list.

Construction runs once per provider:
1. Drop host names matching the exclusion pattern
2. Resolve each remaining name, one at a time
3. Attach a static and a dynamic polling cache to every node
4. Force a first static poll on all nodes and wait for all to settle
5. Force a first dynamic poll on all nodes and wait for all to settle
6. Sort by resolved address and build the id lookup

The static barrier settles fleet-wide before any dynamic poll starts.
Dynamic stats are rate-derived, so the forced dynamic poll gives every node
its baseline sample before anyone reads utilization.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Awaitable, Callable, Iterable, Mapping
from types import MappingProxyType

from loguru import logger

from hostpulse.config.models import HostProviderConfig
from hostpulse.core.types import CacheKind
from hostpulse.provider.cache import PollingCache
from hostpulse.provider.collector import NodeCollector
from hostpulse.provider.node import HostNode
from hostpulse.provider.resolver import UNREACHABLE, Reachability, resolve_host_async
from hostpulse.utils.logger import log_prefix

ResolverFunc = Callable[[str], Awaitable[Reachability]]


def filter_host_names(
    host_names: Iterable[str],
    exclude_pattern: re.Pattern[str] | str | None = None,
) -> list[str]:
    """
    Drop names matching the exclusion pattern, keeping input order.

    A missing pattern excludes nothing. String patterns are compiled
    case-insensitively.
    """
    if isinstance(exclude_pattern, str):
        exclude_pattern = re.compile(exclude_pattern, re.IGNORECASE) if exclude_pattern else None

    kept = []
    for name in host_names:
        if exclude_pattern is not None and exclude_pattern.search(name):
            logger.debug(f"Excluding {name} (matches {exclude_pattern.pattern!r})")
            continue
        kept.append(name)
    return kept


class NodeRegistry:
    """
    Owner of the node list and the id lookup.

    Both are published together at the end of build() and never mutated
    afterwards, so concurrent readers need no locking.
    """

    def __init__(
        self,
        config: HostProviderConfig,
        collector: NodeCollector,
        resolver: ResolverFunc | None = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            config: Provider settings (poll intervals, fetch timeout)
            collector: Data collector bound into every node
            resolver: Async name resolver (defaults to DNS)
        """
        self.config = config
        self.collector = collector
        self._resolver = resolver or resolve_host_async
        self._nodes: tuple[HostNode, ...] = ()
        self._lookup: Mapping[str, HostNode] = MappingProxyType({})
        self.is_built = False

    @property
    def nodes(self) -> tuple[HostNode, ...]:
        """Nodes sorted by address (empty until build completes)."""
        return self._nodes

    def lookup(self, node_id: str) -> HostNode | None:
        """Get a node by id (the configured host name), or None."""
        return self._lookup.get(node_id)

    async def build(
        self,
        host_names: Iterable[str],
        exclude_pattern: re.Pattern[str] | str | None = None,
    ) -> tuple[tuple[HostNode, ...], Mapping[str, HostNode]]:
        """
        Build, bootstrap and publish the node list.

        Args:
            host_names: Configured host names, in order
            exclude_pattern: Names matching this regex are skipped entirely

        Returns:
            Tuple of (sorted nodes, read-only id -> node mapping)
        """
        nodes: list[HostNode] = []
        for name in filter_host_names(host_names, exclude_pattern):
            node = HostNode(id=name, collector=self.collector)
            reachability = await self._resolve(name)
            node.ip = reachability.ip
            node.status = reachability.status
            self._attach_caches(node)
            nodes.append(node)

        # Force update static host data, including os info, volumes, interfaces
        await self._barrier(CacheKind.STATIC, [n.static_cache for n in nodes])
        # Force first dynamic poll: utilization needs a baseline raw sample
        await self._barrier(CacheKind.DYNAMIC, [n.dynamic_cache for n in nodes])

        nodes.sort(key=lambda n: n.endpoint)
        self._nodes = tuple(nodes)
        self._lookup = MappingProxyType({n.id: n for n in self._nodes})
        self.is_built = True

        with_data = sum(1 for n in self._nodes if n.has_data)
        logger.info(
            f"{log_prefix('✅')} Node registry built: {len(self._nodes)} nodes, "
            f"{with_data} with data"
        )
        return self._nodes, self._lookup

    async def _resolve(self, name: str) -> Reachability:
        try:
            return await self._resolver(name)
        except Exception as e:
            # Resolvers should not raise; treat a misbehaving one as a failed lookup
            logger.debug(f"{log_prefix('🌐')} Resolver raised for {name}: {e}")
            return UNREACHABLE

    def _attach_caches(self, node: HostNode) -> None:
        timeout = self.config.query_timeout_seconds
        node.caches.append(PollingCache(
            node.poll_node_info,
            self.config.static_data_timeout_seconds,
            label=f"{node.name}-Static",
            kind=CacheKind.STATIC,
            timeout=timeout,
        ))
        node.caches.append(PollingCache(
            node.poll_stats,
            self.config.dynamic_data_timeout_seconds,
            label=f"{node.name}-Dynamic",
            kind=CacheKind.DYNAMIC,
            timeout=timeout,
        ))

    @staticmethod
    async def _barrier(kind: CacheKind, caches: list[PollingCache]) -> None:
        """Force-poll every cache concurrently and wait until all have settled."""
        if not caches:
            return

        logger.debug(f"{log_prefix('🚧')} Forcing {kind} poll on {len(caches)} nodes")
        # Completion, not success: one failing host must not abort the others
        results = await asyncio.gather(
            *(cache.poll(force=True) for cache in caches),
            return_exceptions=True,
        )

        failed = 0
        for cache, result in zip(caches, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(f"{log_prefix('⚠️')} Forced poll {cache.label} raised: {result}")
                failed += 1
            elif not result:
                failed += 1

        logger.info(
            f"{log_prefix('🚧')} {kind.capitalize()} poll settled: "
            f"{len(caches) - failed}/{len(caches)} succeeded"
        )
