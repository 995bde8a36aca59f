"""Shared utility functions for tmuxmcp."""

from tmuxmcp.utils.exceptions import (
    TmuxMcpError,
    TmuxError,
    HostUnavailableError,
    TmuxServerNotRunningError,
    SessionNotFoundError,
    CreateFailedError,
    InjectFailedError,
    CaptureFailedError,
    TokenError,
    UnknownTokenError,
    MalformedPauseError,
    SequenceError,
    InvalidStateError,
    ConfigError,
    ConfigLoadError,
)
from tmuxmcp.utils.logging import (
    get_logger,
    configure_logging,
    is_debug_mode,
    log_startup_info,
)

__all__ = [
    # Exceptions
    "TmuxMcpError",
    "TmuxError",
    "HostUnavailableError",
    "TmuxServerNotRunningError",
    "SessionNotFoundError",
    "CreateFailedError",
    "InjectFailedError",
    "CaptureFailedError",
    "TokenError",
    "UnknownTokenError",
    "MalformedPauseError",
    "SequenceError",
    "InvalidStateError",
    "ConfigError",
    "ConfigLoadError",
    # Logging
    "get_logger",
    "configure_logging",
    "is_debug_mode",
    "log_startup_info",
]
