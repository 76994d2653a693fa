"""
HostPulse Config - Loader.

Reads the YAML configuration file and validates it into a Config.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from hostpulse.config.constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH
from hostpulse.config.models import Config
from hostpulse.core.exceptions import ConfigError


def resolve_config_path(path: str | Path | None = None) -> Path:
    """
    Pick the configuration file to read.

    Order: explicit path, then $HOSTPULSE_CONFIG, then ~/.hostpulse/config.yaml.
    """
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(path: str | Path | None = None) -> Config:
    """
    Load configuration from YAML.

    Args:
        path: Optional explicit config file.

    Returns:
        Validated Config. Defaults are used when the file does not exist.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    config_path = resolve_config_path(path)

    if not config_path.exists():
        logger.debug(f"📁 Config file not found, using defaults: {config_path}")
        return Config()

    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", str(config_path)) from e

    return parse_config(data or {}, source=str(config_path))


def parse_config(data: dict, source: str | None = None) -> Config:
    """Validate an already-parsed mapping into a Config."""
    if not isinstance(data, dict):
        raise ConfigError("top-level document must be a mapping", source)
    try:
        config = Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(str(e), source) from e

    logger.debug(
        f"📄 Loaded config: {len(config.provider.nodes)} nodes, "
        f"exclude={config.dashboard.exclude_pattern!r}"
    )
    return config
