"""
Tests for NodeRegistry construction and the two-phase bootstrap barrier.
"""

from __future__ import annotations

import re

import pytest

from hostpulse.core.exceptions import PollTimeoutError
from hostpulse.core.types import CacheKind, NodeStatus
from hostpulse.provider.registry import NodeRegistry, filter_host_names


def test_filter_keeps_order_and_duplicates() -> None:
    names = ["b.co", "x.co", "a.co", "b.co"]

    assert filter_host_names(names, r"x\.co") == ["b.co", "a.co", "b.co"]


def test_filter_without_pattern_excludes_nothing() -> None:
    assert filter_host_names(["a.co", "b.co"], None) == ["a.co", "b.co"]
    assert filter_host_names(["a.co", "b.co"], "") == ["a.co", "b.co"]


def test_filter_accepts_compiled_pattern() -> None:
    assert filter_host_names(["db-1", "web-1", "db-2"], re.compile("^db-")) == ["web-1"]


@pytest.mark.asyncio
async def test_excluded_names_are_invisible(provider_config, collector, resolver) -> None:
    registry = NodeRegistry(provider_config, collector, resolver)

    nodes, lookup = await registry.build(["a.co", "b.co", "x.co"], r"x\.co")

    assert sorted(n.id for n in nodes) == ["a.co", "b.co"]
    assert registry.lookup("x.co") is None
    assert "x.co" not in lookup
    assert "x.co" not in resolver.calls
    assert all(host != "x.co" for _, host in collector.events)


@pytest.mark.asyncio
async def test_every_node_gets_static_then_dynamic_cache(provider_config, collector, resolver) -> None:
    registry = NodeRegistry(provider_config, collector, resolver)

    nodes, _ = await registry.build(["a.co", "b.co"])

    for node in nodes:
        assert [c.kind for c in node.caches] == [CacheKind.STATIC, CacheKind.DYNAMIC]
        assert node.static_cache.label == f"{node.id}-Static"
        assert node.dynamic_cache.label == f"{node.id}-Dynamic"
        assert node.static_cache.interval == 300
        assert node.dynamic_cache.interval == 30
        assert node.static_cache.timeout == 2.0


@pytest.mark.asyncio
async def test_unresolvable_node_still_gets_pollers(provider_config, collector, resolver_for) -> None:
    registry = NodeRegistry(provider_config, collector, resolver_for({"a.co": "10.0.0.1", "b.co": None}))

    await registry.build(["a.co", "b.co"])

    a, b = registry.lookup("a.co"), registry.lookup("b.co")
    assert a.status == NodeStatus.ACTIVE
    assert a.ip == "10.0.0.1"
    assert b.status == NodeStatus.UNREACHABLE
    assert b.ip is None
    assert len(b.caches) == 2
    # Reachability is advisory: polling is still attempted
    assert b.static_cache.poll_count == 1
    assert b.dynamic_cache.poll_count == 1


@pytest.mark.asyncio
async def test_raising_resolver_degrades_to_unreachable(provider_config, collector) -> None:
    async def broken(name):
        raise RuntimeError("resolver crashed")

    registry = NodeRegistry(provider_config, collector, broken)

    nodes, _ = await registry.build(["a.co"])

    assert nodes[0].status == NodeStatus.UNREACHABLE
    assert nodes[0].ip is None


@pytest.mark.asyncio
async def test_resolution_is_sequential_in_input_order(provider_config, collector, resolver) -> None:
    registry = NodeRegistry(provider_config, collector, resolver)

    await registry.build(["x.co", "a.co", "b.co"])

    assert resolver.calls == ["x.co", "a.co", "b.co"]


@pytest.mark.asyncio
async def test_static_barrier_settles_before_any_dynamic_poll(
    provider_config, make_collector, resolver
) -> None:
    # b.co is slow: its static poll must still finish before a.co's dynamic poll begins
    collector = make_collector(delays={"b.co": 0.1, "a.co": 0.01})
    registry = NodeRegistry(provider_config, collector, resolver)

    await registry.build(["a.co", "b.co"])

    phases = [phase for phase, _ in collector.events]
    last_static_end = max(i for i, p in enumerate(phases) if p == "static-end")
    first_dynamic_start = phases.index("dynamic-start")
    assert last_static_end < first_dynamic_start


@pytest.mark.asyncio
async def test_forced_polls_fan_out_concurrently(provider_config, collector, resolver) -> None:
    registry = NodeRegistry(provider_config, collector, resolver)

    await registry.build(["a.co", "b.co", "x.co"])

    phases = [phase for phase, _ in collector.events]
    # All static polls start before the first one completes
    assert phases[:3] == ["static-start"] * 3
    assert phases[6:9] == ["dynamic-start"] * 3


@pytest.mark.asyncio
async def test_failed_polls_do_not_abort_bootstrap(provider_config, make_collector, resolver) -> None:
    registry = NodeRegistry(provider_config, make_collector(failing={"a.co"}), resolver)

    await registry.build(["a.co", "b.co"])

    a, b = registry.lookup("a.co"), registry.lookup("b.co")
    assert not a.static_cache.has_data
    assert not a.dynamic_cache.has_data
    assert a.static_cache.failure_count == 1
    assert b.static_cache.has_data
    assert b.dynamic_cache.has_data
    assert registry.is_built


@pytest.mark.asyncio
async def test_hung_host_is_bounded_by_query_timeout(provider_config, make_collector, resolver) -> None:
    provider_config.query_timeout_seconds = 0.05
    registry = NodeRegistry(provider_config, make_collector(hanging={"a.co"}), resolver)

    await registry.build(["a.co", "b.co"])

    a = registry.lookup("a.co")
    assert isinstance(a.static_cache.last_error, PollTimeoutError)
    assert registry.lookup("b.co").has_data


@pytest.mark.asyncio
async def test_nodes_sorted_by_address_with_unresolved_first(provider_config, collector, resolver_for) -> None:
    resolver = resolver_for({"a.co": "10.0.0.3", "b.co": "10.0.0.1", "c.co": None})
    registry = NodeRegistry(provider_config, collector, resolver)

    nodes, _ = await registry.build(["a.co", "b.co", "c.co"])

    assert [n.id for n in nodes] == ["c.co", "b.co", "a.co"]


@pytest.mark.asyncio
async def test_lookup_matches_node_list(provider_config, collector, resolver) -> None:
    registry = NodeRegistry(provider_config, collector, resolver)

    nodes, lookup = await registry.build(["a.co", "b.co"])

    assert set(lookup.values()) == set(nodes)
    assert all(lookup[n.id] is n for n in nodes)
    with pytest.raises(TypeError):
        lookup["z.co"] = nodes[0]


@pytest.mark.asyncio
async def test_empty_host_list(provider_config, collector, resolver) -> None:
    registry = NodeRegistry(provider_config, collector, resolver)

    nodes, lookup = await registry.build([])

    assert nodes == ()
    assert dict(lookup) == {}
    assert registry.is_built


@pytest.mark.asyncio
async def test_duplicate_names_keep_both_nodes_and_last_wins_lookup(
    provider_config, collector, resolver
) -> None:
    registry = NodeRegistry(provider_config, collector, resolver)

    nodes, lookup = await registry.build(["a.co", "a.co"])

    assert len(nodes) == 2
    assert len(lookup) == 1
    assert lookup["a.co"] is nodes[-1]
