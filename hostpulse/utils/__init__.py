"""HostPulse utilities."""
