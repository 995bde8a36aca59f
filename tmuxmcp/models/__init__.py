# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Pydantic models for tmuxmcp configuration."""

from tmuxmcp.models.host_config import (
    CaptureConfig,
    DelaysConfig,
    HostConfigModel,
    LoggingConfig,
    ServerConfig,
    TimeoutsConfig,
    TmuxConfig,
)

__all__ = [
    "CaptureConfig",
    "DelaysConfig",
    "HostConfigModel",
    "LoggingConfig",
    "ServerConfig",
    "TimeoutsConfig",
    "TmuxConfig",
]
