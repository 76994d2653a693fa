"""
Polling Cache - an async fetch function wrapped with a refresh interval.

A cache holds the last value its fetch produced. Forced polls run
immediately; regular polls are skipped while the value is fresh. Polls on
one cache are serialized with an asyncio.Lock; failures are recorded on the
cache and never raised to the caller.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from loguru import logger

from hostpulse.core.exceptions import PollTimeoutError
from hostpulse.core.types import CacheKind
from hostpulse.utils.logger import log_prefix

FetchFunc = Callable[[], Awaitable[Any]]


class PollingCache:
    """
    Time-based cache around a polling coroutine.

    Example:
        >>> cache = PollingCache(node.poll_node_info, 300, "web01-Static")
        >>> await cache.poll(force=True)
        >>> cache.has_data
        True
    """

    def __init__(
        self,
        fetch: FetchFunc,
        interval: float,
        label: str,
        kind: CacheKind | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            fetch: Coroutine function producing the cached value
            interval: Refresh interval in seconds
            label: Human-readable name, e.g. "web01-Dynamic"
            kind: Static or dynamic cadence
            timeout: Optional bound on a single fetch in seconds
        """
        self._fetch = fetch
        self.interval = interval
        self.label = label
        self.kind = kind
        self.timeout = timeout

        self._value: Any = None
        self._has_value = False
        self._lock = asyncio.Lock()
        self._task: asyncio.Task | None = None

        self.last_poll: float | None = None
        self.last_success: float | None = None
        self.last_error: BaseException | None = None
        self.last_duration_ms: float | None = None
        self.poll_count = 0
        self.failure_count = 0

    def __repr__(self) -> str:
        return f"<PollingCache {self.label} interval={self.interval}s has_data={self.has_data}>"

    @property
    def value(self) -> Any:
        """Last successfully fetched value (None if never fetched)."""
        return self._value

    @property
    def has_data(self) -> bool:
        """True once a fetch has succeeded (even if it returned None)."""
        return self._has_value

    @property
    def is_polling(self) -> bool:
        return self._lock.locked()

    @property
    def age_seconds(self) -> float | None:
        """Seconds since the last successful fetch."""
        if self.last_success is None:
            return None
        return time.time() - self.last_success

    @property
    def is_stale(self) -> bool:
        """True if the value is missing or older than the interval."""
        age = self.age_seconds
        return age is None or age >= self.interval

    async def poll(self, force: bool = False) -> bool:
        """
        Refresh the cached value.

        Args:
            force: Poll even if the current value is still fresh

        Returns:
            True if the cache holds fresh data afterwards, False if the fetch failed.
        """
        if not force and not self.is_stale:
            return True

        async with self._lock:
            # Another caller may have refreshed while we waited on the lock
            if not force and not self.is_stale:
                return True

            self.poll_count += 1
            self.last_poll = time.time()
            start = time.monotonic()
            try:
                if self.timeout:
                    value = await asyncio.wait_for(self._fetch(), timeout=self.timeout)
                else:
                    value = await self._fetch()
            except asyncio.TimeoutError:
                self._record_failure(PollTimeoutError(self.label, self.timeout or 0))
                return False
            except Exception as e:
                self._record_failure(e)
                return False
            finally:
                self.last_duration_ms = (time.monotonic() - start) * 1000

            self._value = value
            self._has_value = True
            self.last_success = time.time()
            self.last_error = None
            logger.trace(f"{log_prefix('🔄')} {self.label} polled in {self.last_duration_ms:.0f}ms")
            return True

    def _record_failure(self, error: BaseException) -> None:
        self.failure_count += 1
        self.last_error = error
        logger.warning(f"{log_prefix('⚠️')} Poll {self.label} failed: {error}")

    # =========================================================================
    # Background refresh
    # =========================================================================

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the background refresh loop (requires a running event loop)."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._refresh_loop(), name=f"poll:{self.label}")

    async def stop(self) -> None:
        """Cancel the background refresh loop and wait for it to exit."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    def _next_delay(self) -> float:
        # Measured from the last attempt so failing hosts are retried once per interval
        if self.last_poll is None:
            return 0.0
        return max(self.interval - (time.time() - self.last_poll), 0.0)

    async def _refresh_loop(self) -> None:
        while True:
            delay = self._next_delay()
            if delay > 0:
                # Re-check after waking: a forced poll may have run meanwhile
                await asyncio.sleep(delay)
                continue
            await self.poll(force=True)

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the cache bookkeeping."""

        def _iso(ts: float | None) -> str | None:
            if ts is None:
                return None
            return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()

        return {
            "label": self.label,
            "kind": str(self.kind) if self.kind else None,
            "interval": self.interval,
            "has_data": self.has_data,
            "is_stale": self.is_stale,
            "last_poll": _iso(self.last_poll),
            "last_success": _iso(self.last_success),
            "last_error": str(self.last_error) if self.last_error else None,
            "poll_count": self.poll_count,
            "failure_count": self.failure_count,
        }
