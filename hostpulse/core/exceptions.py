"""
Core Exceptions - Unified error hierarchy for HostPulse.

Per-node failures never escape the provider bootstrap; these types exist
so collectors and callers can tell failure categories apart.
"""


class HostPulseError(Exception):
    """Base exception for all HostPulse errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigError(HostPulseError):
    """Configuration could not be loaded or validated."""

    def __init__(self, reason: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(f"Invalid configuration: {reason}", details)
        self.reason = reason
        self.path = path


# =============================================================================
# Polling Errors
# =============================================================================

class CollectorError(HostPulseError):
    """Collecting data from a host failed."""

    def __init__(self, host: str, reason: str):
        super().__init__(
            f"Collection from '{host}' failed: {reason}",
            {"host": host, "reason": reason}
        )
        self.host = host
        self.reason = reason


class PollTimeoutError(HostPulseError):
    """A poll did not complete within its timeout."""

    def __init__(self, label: str, timeout_seconds: float):
        super().__init__(
            f"Poll '{label}' timed out after {timeout_seconds}s",
            {"label": label, "timeout": timeout_seconds}
        )
        self.label = label
        self.timeout_seconds = timeout_seconds


# =============================================================================
# Provider Errors
# =============================================================================

class ProviderNotReadyError(HostPulseError):
    """Provider bootstrap did not finish in time."""

    def __init__(self, provider: str, timeout_seconds: float):
        super().__init__(
            f"Provider '{provider}' not ready after {timeout_seconds}s",
            {"provider": provider, "timeout": timeout_seconds}
        )
        self.provider = provider
