"""
Dashboard Data Provider - contract shared by every provider type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from hostpulse.core.types import MonitorStatus
from hostpulse.provider.cache import PollingCache
from hostpulse.provider.node import HostNode


class DashboardDataProvider(ABC):
    """
    Base class for providers feeding the dashboard.

    A provider owns a set of nodes and the pollers that keep them fresh.
    """

    #: Fixed label identifying the provider's collection method
    node_type: str = ""

    #: Floor advertised to schedulers re-checking this provider (seconds)
    min_seconds_between_polls: int = 0

    def __init__(self, name: str) -> None:
        self.name = name

    @property
    @abstractmethod
    def all_nodes(self) -> Sequence[HostNode]:
        """Every node this provider knows about."""

    @property
    @abstractmethod
    def data_pollers(self) -> list[PollingCache]:
        """Every poller this provider runs."""

    @property
    def has_data(self) -> bool:
        """True if any poller currently holds a value."""
        return any(p.has_data for p in self.data_pollers)

    @abstractmethod
    def get_node(self, node_id: str) -> HostNode | None:
        """Look a node up by id."""

    @abstractmethod
    def monitor_status(self) -> list[MonitorStatus]:
        """Statuses contributing to this provider's aggregate health."""

    @abstractmethod
    def monitor_status_reason(self) -> str | None:
        """Explanation of the aggregate health, if any."""
