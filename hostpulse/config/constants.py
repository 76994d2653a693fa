"""
HostPulse Configuration Constants.

Centralized constants for poll intervals, timeouts and paths.
"""

from pathlib import Path

# Provider scheduling (seconds)
MIN_SECONDS_BETWEEN_POLLS = 10  # Floor advertised to external schedulers

# Polling cadence (seconds)
DEFAULT_STATIC_DATA_TIMEOUT = 5 * 60  # Inventory: OS, volumes, interfaces
DEFAULT_DYNAMIC_DATA_TIMEOUT = 30     # Utilization: CPU, memory, throughput
DEFAULT_QUERY_TIMEOUT = 30.0          # Bound on a single fetch

# Name resolution
DNS_RESOLVE_TIMEOUT = 5.0

# Paths
CONFIG_DIR = Path.home() / ".hostpulse"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.yaml"
CONFIG_ENV_VAR = "HOSTPULSE_CONFIG"
