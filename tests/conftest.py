"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import pytest

from hostpulse.config.models import HostProviderConfig
from hostpulse.core.exceptions import CollectorError
from hostpulse.core.types import NodeStatus
from hostpulse.provider.models import CounterSample, NodeInfo
from hostpulse.provider.resolver import UNREACHABLE, Reachability


class FakeCollector:
    """
    Collector double recording the order of poll starts and ends.

    Events are (phase, host) tuples, e.g. ("static-start", "a.co").
    """

    def __init__(
        self,
        failing: Iterable[str] = (),
        hanging: Iterable[str] = (),
        delays: dict[str, float] | None = None,
    ) -> None:
        self.failing = set(failing)
        self.hanging = set(hanging)
        self.delays = delays or {}
        self.events: list[tuple[str, str]] = []
        self.samples_taken: dict[str, int] = {}

    async def _run(self, phase: str, host: str) -> None:
        self.events.append((f"{phase}-start", host))
        if host in self.hanging:
            await asyncio.Event().wait()
        await asyncio.sleep(self.delays.get(host, 0.01))
        self.events.append((f"{phase}-end", host))
        if host in self.failing:
            raise CollectorError(host, f"{phase} poll refused")

    async def collect_info(self, node) -> NodeInfo:
        await self._run("static", node.id)
        return NodeInfo(hostname=node.id, os_name="Linux", os_version="6.1", cpu_count=4)

    async def collect_sample(self, node) -> CounterSample:
        await self._run("dynamic", node.id)
        n = self.samples_taken.get(node.id, 0) + 1
        self.samples_taken[node.id] = n
        # Every sample: 10s apart, half the CPU time busy
        return CounterSample(
            timestamp=10.0 * n,
            cpu_busy_seconds=5.0 * n,
            cpu_total_seconds=10.0 * n,
            memory_used_bytes=512,
            memory_total_bytes=1024,
            net_bytes_recv=1000 * n,
            net_bytes_sent=500 * n,
        )


def make_resolver(addresses: dict[str, str | None]):
    """Async resolver returning the given address per name (None = unresolvable)."""
    calls: list[str] = []

    async def resolve(name: str) -> Reachability:
        calls.append(name)
        ip = addresses.get(name)
        if ip is None:
            return UNREACHABLE
        return Reachability(status=NodeStatus.ACTIVE, ip=ip)

    resolve.calls = calls
    return resolve


@pytest.fixture
def collector() -> FakeCollector:
    return FakeCollector()


@pytest.fixture
def provider_config() -> HostProviderConfig:
    return HostProviderConfig(
        name="test-hosts",
        nodes=["a.co", "b.co", "x.co"],
        static_data_timeout_seconds=300,
        dynamic_data_timeout_seconds=30,
        query_timeout_seconds=2.0,
    )


@pytest.fixture
def resolver():
    return make_resolver({"a.co": "10.0.0.2", "b.co": "10.0.0.1", "x.co": "10.0.0.9"})


@pytest.fixture
def make_collector():
    """Factory for FakeCollector with failing, hanging or slow hosts."""
    return FakeCollector


@pytest.fixture
def resolver_for():
    """Factory for fake resolvers from a name -> address table."""
    return make_resolver
