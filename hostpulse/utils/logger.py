"""
Centralized logging for HostPulse.

Provides:
- Rotated file logging (text or JSON lines)
- Optional colorized console output
- Emoji or ASCII log prefixes
"""
import json
import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from hostpulse.config.models import LoggingConfig


def use_emoji_logs() -> bool:
    """
    Check if emoji prefixes should be used in log messages.

    Returns True unless HOSTPULSE_EMOJI_LOGS is set to "0" or "false".
    """
    value = os.environ.get("HOSTPULSE_EMOJI_LOGS", "1").lower()
    return value not in ("0", "false", "no", "off")


# Mapping of emoji prefixes to ASCII alternatives
_EMOJI_TO_ASCII = {
    "🔄": "[POLL]",
    "⚠️": "[WARN]",
    "⏱️": "[TIMEOUT]",
    "🌐": "[DNS]",
    "✅": "[OK]",
    "❌": "[ERROR]",
    "🚧": "[BARRIER]",
    "📁": "[FILE]",
    "📄": "[CONFIG]",
    "📊": "[STATS]",
}


def log_prefix(emoji: str) -> str:
    """
    Return the appropriate log prefix based on HOSTPULSE_EMOJI_LOGS.

    Args:
        emoji: The emoji to use when emoji logs are enabled.

    Returns:
        The emoji if enabled, otherwise its ASCII equivalent
        (or empty string if no mapping exists).
    """
    if use_emoji_logs():
        return emoji
    return _EMOJI_TO_ASCII.get(emoji, "")


def _format_json(record) -> str:
    """Format a record as one JSON line."""
    entry = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["name"],
        "function": record["function"],
        "line": record["line"],
    }
    # Escape braces: loguru treats the returned string as a format template
    return json.dumps(entry).replace("{", "{{").replace("}", "}}") + "\n"


def setup_logger(verbose: bool = False, config: Optional[LoggingConfig] = None) -> Path:
    """
    Configure loguru sinks.

    Rules:
    1. FILE: Always log to <log_dir>/<app_log_name> (rotated).
    2. CONSOLE: Log to stderr at console_level, or DEBUG when verbose.

    Args:
        verbose: Force DEBUG console output
        config: Logging settings (defaults if not provided)

    Returns:
        Path of the log file.
    """
    config = config or LoggingConfig()
    logger.remove()

    log_dir = Path(config.log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / config.app_log_name

    logger.add(
        log_path,
        rotation=config.rotation,
        retention=config.retention,
        level=config.file_level.upper(),
        format=_format_json if config.json_logs else (
            "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
            "{name}:{function}:{line} - {message}"
        ),
        enqueue=True,
    )

    logger.add(
        sys.stderr,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level="DEBUG" if verbose else config.console_level.upper(),
        colorize=True,
    )
    return log_path
