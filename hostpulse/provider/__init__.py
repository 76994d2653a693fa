"""
HostPulse Provider - nodes, pollers and the host data provider.
"""

from hostpulse.provider.base import DashboardDataProvider
from hostpulse.provider.cache import PollingCache
from hostpulse.provider.collector import LocalCollector, NodeCollector
from hostpulse.provider.host_provider import HostDataProvider
from hostpulse.provider.models import CounterSample, NodeInfo, NodeStats
from hostpulse.provider.node import HostNode
from hostpulse.provider.registry import NodeRegistry
from hostpulse.provider.resolver import Reachability, resolve_host, resolve_host_async

__all__ = [
    "CounterSample",
    "DashboardDataProvider",
    "HostDataProvider",
    "HostNode",
    "LocalCollector",
    "NodeCollector",
    "NodeInfo",
    "NodeRegistry",
    "NodeStats",
    "PollingCache",
    "Reachability",
    "resolve_host",
    "resolve_host_async",
]
