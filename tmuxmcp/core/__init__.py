# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Core session engine for tmuxmcp.

Modules:
    keys: Token parsing and tmux key translation
    tmux: Low-level tmux operations (one subprocess per call)
    capture: Screen capture and SGR stripping
    sequencer: Ordered token execution with pacing
    prompts: Interactive operation tracking (git add -p and friends)
    sessions: High-level operations used by the MCP server
"""

from tmuxmcp.core.keys import (
    KEY_MAP,
    Literal,
    Modifier,
    NamedKey,
    Pause,
    Unrecognized,
    parse_token,
    translate_key,
)
from tmuxmcp.core.tmux import TmuxHost, ensure_tmux_available
from tmuxmcp.core.capture import capture_screen, strip_sgr
from tmuxmcp.core.sequencer import SequenceResult, send_commands
from tmuxmcp.core.prompts import (
    OperationStatus,
    OperationStore,
    PromptOperation,
    PromptTracker,
)
from tmuxmcp.core.sessions import SessionService

__all__ = [
    # keys
    "KEY_MAP",
    "Literal",
    "Modifier",
    "NamedKey",
    "Pause",
    "Unrecognized",
    "parse_token",
    "translate_key",
    # tmux (low-level)
    "TmuxHost",
    "ensure_tmux_available",
    # capture
    "capture_screen",
    "strip_sgr",
    # sequencing
    "SequenceResult",
    "send_commands",
    # interactive prompts
    "OperationStatus",
    "OperationStore",
    "PromptOperation",
    "PromptTracker",
    # sessions (high-level)
    "SessionService",
]
