# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Host configuration loading.

Reads ~/.config/tmuxmcp/config.yml (or $TMUXMCP_CONFIG) and validates it
against HostConfigModel. A missing file yields the defaults.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from tmuxmcp.models.host_config import HostConfigModel
from tmuxmcp.utils.exceptions import ConfigLoadError
from tmuxmcp.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "tmuxmcp" / "config.yml"

_config_cache: Optional[HostConfigModel] = None


def get_config_path() -> Path:
    """Resolve the config file location, honouring TMUXMCP_CONFIG."""
    env_path = os.environ.get("TMUXMCP_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[Path] = None) -> HostConfigModel:
    """Load and validate the host config.

    Args:
        config_path: Explicit path; defaults to get_config_path()

    Returns:
        Validated config model

    Raises:
        ConfigLoadError: If the file exists but is not valid
    """
    path = config_path or get_config_path()
    if not path.exists():
        logger.debug(f"Config file not found: {path}, using defaults")
        return HostConfigModel()

    try:
        with open(path, "r") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigLoadError(f"Failed to load {path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigLoadError(f"Invalid config in {path}: expected a mapping")

    try:
        model = HostConfigModel.model_validate(raw_config)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(x) for x in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ConfigLoadError(f"Invalid config in {path}: {details}") from e

    logger.debug(f"Loaded config from {path}")
    return model


def get_config() -> HostConfigModel:
    """Return the cached host config, loading it on first use."""
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def set_config(config: HostConfigModel) -> None:
    """Replace the cached config (used by the CLI after --config)."""
    global _config_cache
    _config_cache = config


def reset_config_cache() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config_cache
    _config_cache = None
