"""
HostPulse - host monitoring data provider.

Discovers configured hosts, attaches static and dynamic polling caches
to each one, and exposes an indexable view of the fleet.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("hostpulse")
except PackageNotFoundError:
    # Package not installed, fallback to pyproject.toml
    __version__ = "0.1.0"

__author__ = "HostPulse Contributors"
