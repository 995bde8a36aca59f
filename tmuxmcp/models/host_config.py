# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Pydantic models for host configuration (~/.config/tmuxmcp/config.yml)."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TmuxConfig(BaseModel):
    """tmux binary and session geometry."""

    binary: str = "tmux"
    width: int = Field(default=80, gt=0)
    height: int = Field(default=24, gt=0)


class TimeoutsConfig(BaseModel):
    """Subprocess timeouts."""

    tmux_command: float = Field(default=5.0, gt=0)


class DelaysConfig(BaseModel):
    """Settle and pacing delays.

    Settle delays are seconds, the command delay is milliseconds to match the
    send_commands tool argument.
    """

    create_settle: float = Field(default=0.2, ge=0)
    attach_settle: float = Field(default=0.2, ge=0)
    prompt_start_settle: float = Field(default=0.3, ge=0)
    prompt_respond_settle: float = Field(default=0.2, ge=0)
    default_command_delay_ms: int = Field(default=100, ge=0)


class CaptureConfig(BaseModel):
    """Screen capture defaults."""

    strip_ansi: bool = True
    capture_after: bool = True


class ServerConfig(BaseModel):
    """MCP server transport settings."""

    transport: Literal["stdio", "sse", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080

    @field_validator("port")
    @classmethod
    def _valid_port(cls, value: int) -> int:
        if not 0 < value <= 65535:
            raise ValueError(f"Port {value} is invalid. Must be between 1 and 65535.")
        return value


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    file: Optional[str] = None


class HostConfigModel(BaseModel):
    """Main host configuration model for ~/.config/tmuxmcp/config.yml."""

    version: str = "1.0"
    tmux: TmuxConfig = Field(default_factory=TmuxConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
    delays: DelaysConfig = Field(default_factory=DelaysConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="allow")  # Allow extra fields for forward compatibility
