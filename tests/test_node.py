"""
Tests for HostNode poll functions and cache accessors.
"""

from __future__ import annotations

import pytest

from hostpulse.core.types import CacheKind, NodeStatus
from hostpulse.provider.cache import PollingCache
from hostpulse.provider.node import HostNode


@pytest.mark.asyncio
async def test_new_node_defaults(collector) -> None:
    node = HostNode(id="web01", collector=collector)

    assert node.name == "web01"
    assert node.status == NodeStatus.UNKNOWN
    assert node.endpoint == ""
    assert node.static_cache is None
    assert node.dynamic_cache is None
    assert not node.has_data


@pytest.mark.asyncio
async def test_poll_node_info_stores_inventory(collector) -> None:
    node = HostNode(id="web01", collector=collector)

    info = await node.poll_node_info()

    assert info.hostname == "web01"
    assert node.info is info


@pytest.mark.asyncio
async def test_first_sample_is_only_a_baseline(collector) -> None:
    node = HostNode(id="web01", collector=collector)

    sample = await node.poll_stats()

    assert node.last_sample is sample
    assert node.stats is None


@pytest.mark.asyncio
async def test_second_sample_yields_stats(collector) -> None:
    node = HostNode(id="web01", collector=collector)

    await node.poll_stats()
    await node.poll_stats()

    assert node.stats is not None
    assert node.stats.cpu_percent == 50.0
    assert node.stats.memory_percent == 50.0
    assert node.stats.net_recv_bytes_per_sec == 100.0


@pytest.mark.asyncio
async def test_cache_accessors_by_kind(collector) -> None:
    node = HostNode(id="web01", collector=collector, ip="10.0.0.5")
    static = PollingCache(node.poll_node_info, 300, "web01-Static", kind=CacheKind.STATIC)
    dynamic = PollingCache(node.poll_stats, 30, "web01-Dynamic", kind=CacheKind.DYNAMIC)
    node.caches.extend([static, dynamic])

    await static.poll(force=True)

    assert node.static_cache is static
    assert node.dynamic_cache is dynamic
    assert node.has_data
    assert node.endpoint == "10.0.0.5"
    summary = node.to_dict()
    assert summary["os"] == "Linux 6.1"
    assert [p["label"] for p in summary["pollers"]] == ["web01-Static", "web01-Dynamic"]
