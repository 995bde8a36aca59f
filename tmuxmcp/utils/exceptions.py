# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Custom exception hierarchy for tmuxmcp."""


class TmuxMcpError(Exception):
    """Base exception for all tmuxmcp errors."""

    pass


class TmuxError(TmuxMcpError):
    """TMux-related errors."""

    pass


class HostUnavailableError(TmuxError):
    """The tmux binary cannot be located."""

    pass


class TmuxServerNotRunningError(TmuxError):
    """TMux server is not running."""

    pass


class SessionNotFoundError(TmuxError):
    """Named session (or interactive operation) does not exist."""

    pass


class CreateFailedError(TmuxError):
    """TMux refused to create a session."""

    pass


class InjectFailedError(TmuxError):
    """Sending keys or text to a session failed."""

    pass


class CaptureFailedError(TmuxError):
    """Capturing a pane failed."""

    pass


class TokenError(TmuxMcpError):
    """Command token errors."""

    pass


class UnknownTokenError(TokenError):
    """Symbolic token has no key mapping."""

    pass


class MalformedPauseError(TokenError):
    """<SLEEP ...> token could not be parsed."""

    pass


class SequenceError(TmuxMcpError):
    """A command sequence aborted on one of its tokens.

    Attributes:
        index: 1-based position of the failing token
        token: Raw text of the failing token
        cause: Underlying error
    """

    def __init__(self, index: int, token: str, cause: Exception):
        self.index = index
        self.token = token
        self.cause = cause
        super().__init__(f"failed to execute command {index} ('{token}'): {cause}")


class InvalidStateError(TmuxMcpError):
    """Interactive operation is not in the expected lifecycle state."""

    pass


class ConfigError(TmuxMcpError):
    """Configuration-related errors."""

    pass


class ConfigLoadError(ConfigError):
    """Failed to load configuration."""

    pass
