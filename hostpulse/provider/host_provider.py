"""
Host Data Provider - the entry point other systems use.

Construction returns immediately. start() bootstraps the node registry on a
background task; until it completes the provider reports no nodes and no
data.
"""

from __future__ import annotations

import asyncio
import re

from loguru import logger

from hostpulse.config.constants import MIN_SECONDS_BETWEEN_POLLS
from hostpulse.config.models import HostProviderConfig
from hostpulse.core.exceptions import ProviderNotReadyError
from hostpulse.core.types import MonitorStatus
from hostpulse.provider.base import DashboardDataProvider
from hostpulse.provider.cache import PollingCache
from hostpulse.provider.collector import LocalCollector, NodeCollector
from hostpulse.provider.node import HostNode
from hostpulse.provider.registry import NodeRegistry, ResolverFunc


class HostDataProvider(DashboardDataProvider):
    """
    Provider for a configured list of hosts.

    Example:
        >>> provider = HostDataProvider(config.provider, exclude_pattern=r"^test-")
        >>> provider.start()
        >>> await provider.wait_ready()
        >>> provider.get_node("web01")
    """

    node_type = "Host"
    min_seconds_between_polls = MIN_SECONDS_BETWEEN_POLLS

    def __init__(
        self,
        config: HostProviderConfig,
        exclude_pattern: re.Pattern[str] | str | None = None,
        collector: NodeCollector | None = None,
        resolver: ResolverFunc | None = None,
    ) -> None:
        """
        Initialize the provider (does not poll anything yet).

        Args:
            config: Provider settings
            exclude_pattern: Host names matching this regex are ignored
            collector: Data collector (defaults to LocalCollector)
            resolver: Async name resolver (defaults to DNS)
        """
        super().__init__(config.name)
        self.config = config
        self.exclude_pattern = exclude_pattern
        self.registry = NodeRegistry(config, collector or LocalCollector(), resolver)
        self._bootstrap: asyncio.Task | None = None
        self._refresh = False
        self._stopped = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self, refresh: bool = False) -> asyncio.Task:
        """
        Schedule the bootstrap and return immediately.

        Args:
            refresh: Start every poller's background refresh loop once
                bootstrap completes

        Returns:
            The bootstrap task
        """
        if self._bootstrap is None:
            self._refresh = refresh
            self._bootstrap = asyncio.create_task(
                self._initialize(), name=f"bootstrap:{self.name}"
            )
            self._bootstrap.add_done_callback(self._log_bootstrap_failure)
        return self._bootstrap

    def _log_bootstrap_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            logger.warning(f"Bootstrap of provider {self.name} was cancelled")
        elif task.exception() is not None:
            logger.opt(exception=task.exception()).error(
                f"❌ Bootstrap of provider {self.name} failed"
            )

    async def _initialize(self) -> None:
        logger.info(f"Bootstrapping provider {self.name} ({len(self.config.nodes)} configured)")
        await self.registry.build(self.config.nodes, self.exclude_pattern)
        if self._refresh and not self._stopped:
            for poller in self.data_pollers:
                poller.start()

    @property
    def ready(self) -> bool:
        """True once the node list and lookup are published."""
        return self.registry.is_built

    async def wait_ready(self, timeout: float | None = None) -> None:
        """
        Wait for bootstrap to complete.

        Raises:
            ProviderNotReadyError: If timeout elapses first (bootstrap keeps running)
        """
        task = self.start(self._refresh)
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise ProviderNotReadyError(self.name, timeout or 0) from e

    async def stop(self) -> None:
        """
        Stop background refresh loops.

        Safe to call before bootstrap completes: loops are then never started.
        """
        self._stopped = True
        await asyncio.gather(*(p.stop() for p in self.data_pollers))

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def all_nodes(self) -> tuple[HostNode, ...]:
        return self.registry.nodes

    @property
    def data_pollers(self) -> list[PollingCache]:
        """Static then dynamic cache of every node, in node order."""
        return [cache for node in self.registry.nodes for cache in node.caches]

    all_pollers = data_pollers

    def get_node(self, node_id: str) -> HostNode | None:
        return self.registry.lookup(node_id)

    lookup = get_node

    # Aggregate health is rendered by the shared dashboard mechanism,
    # not summarized per provider.
    def monitor_status(self) -> list[MonitorStatus]:
        return []

    def monitor_status_reason(self) -> str | None:
        return None
