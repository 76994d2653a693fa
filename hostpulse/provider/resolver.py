"""
Reachability Resolver - host name to address and liveness verdict.

Reachability is a best-effort hint derived from name resolution alone.
Every failure mode collapses to UNREACHABLE; nothing is raised.
"""

from __future__ import annotations

import asyncio
import socket
import threading
from dataclasses import dataclass

from loguru import logger

from hostpulse.config.constants import DNS_RESOLVE_TIMEOUT
from hostpulse.core.types import NodeStatus
from hostpulse.utils.logger import log_prefix


@dataclass(frozen=True)
class Reachability:
    """Outcome of resolving one host name."""

    status: NodeStatus
    ip: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == NodeStatus.ACTIVE


UNREACHABLE = Reachability(status=NodeStatus.UNREACHABLE)


def resolve_host(hostname: str) -> Reachability:
    """
    Resolve a host name (blocking).

    Args:
        hostname: Configured host name

    Returns:
        ACTIVE with the first resolved address, or UNREACHABLE.
    """
    try:
        # sockaddr is (ip, port) for IPv4 or (ip, port, flow, scope) for IPv6
        addrinfo = socket.getaddrinfo(hostname, None, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except (OSError, UnicodeError, ValueError) as e:
        # socket.gaierror and socket.timeout are OSError subclasses
        logger.debug(f"{log_prefix('🌐')} Could not resolve {hostname!r}: {e}")
        return UNREACHABLE

    if not addrinfo:
        logger.debug(f"{log_prefix('🌐')} No addresses for {hostname!r}")
        return UNREACHABLE

    ip = str(addrinfo[0][4][0])
    logger.debug(f"{log_prefix('🌐')} Resolved {hostname} to {ip}")
    return Reachability(status=NodeStatus.ACTIVE, ip=ip)


def _resolve_in_thread(loop: asyncio.AbstractEventLoop, hostname: str) -> asyncio.Future:
    """
    Run resolve_host on a daemon thread and return a future for its result.

    The thread is never joined: a lookup abandoned after a timeout does not
    hold up executor shutdown or interpreter exit.
    """
    future: asyncio.Future = loop.create_future()

    def _deliver(result: Reachability) -> None:
        if not future.done():
            future.set_result(result)

    def _worker() -> None:
        result = resolve_host(hostname)
        try:
            loop.call_soon_threadsafe(_deliver, result)
        except RuntimeError:
            # Loop already closed; nobody is waiting any more
            pass

    threading.Thread(target=_worker, name=f"dns:{hostname}", daemon=True).start()
    return future


async def resolve_host_async(
    hostname: str,
    timeout: float = DNS_RESOLVE_TIMEOUT,
) -> Reachability:
    """
    Resolve a host name without blocking the event loop.

    socket.getaddrinfo has no timeout of its own and cannot be interrupted.
    The lookup runs on a daemon thread under asyncio.wait_for; on timeout the
    thread is left to finish on its own and its result is discarded.
    """
    loop = asyncio.get_running_loop()
    try:
        return await asyncio.wait_for(_resolve_in_thread(loop, hostname), timeout=timeout)
    except asyncio.TimeoutError:
        logger.debug(f"{log_prefix('⏱️')} DNS resolution timed out for {hostname}")
        return UNREACHABLE
