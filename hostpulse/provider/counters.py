"""
Counter math - utilization from cumulative counters.

Dynamic data is rate-derived: a single raw sample carries no utilization,
so every computation needs the previous sample as a baseline.
"""

from __future__ import annotations

from hostpulse.provider.models import CounterSample, NodeStats


def counter_rate(previous: float, current: float, elapsed: float) -> float:
    """
    Per-second rate of a cumulative counter.

    Returns 0.0 when no time elapsed or the counter went backwards
    (wrap-around or host reboot).
    """
    if elapsed <= 0:
        return 0.0
    delta = current - previous
    if delta < 0:
        return 0.0
    return delta / elapsed


def _percent(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return min(max(part / whole * 100.0, 0.0), 100.0)


def compute_stats(previous: CounterSample, current: CounterSample) -> NodeStats:
    """
    Derive utilization between two samples of the same host.

    Args:
        previous: Baseline sample
        current: Newer sample

    Returns:
        NodeStats over the elapsed interval
    """
    elapsed = current.timestamp - previous.timestamp

    busy_delta = current.cpu_busy_seconds - previous.cpu_busy_seconds
    total_delta = current.cpu_total_seconds - previous.cpu_total_seconds
    cpu_percent = _percent(busy_delta, total_delta) if busy_delta >= 0 else 0.0

    return NodeStats(
        cpu_percent=round(cpu_percent, 2),
        memory_percent=round(_percent(current.memory_used_bytes, current.memory_total_bytes), 2),
        net_recv_bytes_per_sec=counter_rate(
            previous.net_bytes_recv, current.net_bytes_recv, elapsed
        ),
        net_sent_bytes_per_sec=counter_rate(
            previous.net_bytes_sent, current.net_bytes_sent, elapsed
        ),
        disk_read_bytes_per_sec=counter_rate(
            previous.disk_bytes_read, current.disk_bytes_read, elapsed
        ),
        disk_write_bytes_per_sec=counter_rate(
            previous.disk_bytes_written, current.disk_bytes_written, elapsed
        ),
        interval_seconds=max(elapsed, 0.0),
    )
