# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Screen capture and normalization.

Only SGR sequences (ESC [ <params> m: colours, bold, underline, reset) are
removed. Other CSI sequences and OSC sequences pass through untouched.
tmux renders cursor movement into the pane grid before capture-pane sees
it, so in practice SGR is all `capture-pane -e` emits.
"""

import re

from tmuxmcp.core.tmux import TmuxHost

SGR_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def strip_sgr(text: str) -> str:
    """Remove ANSI colour/attribute sequences from text."""
    return SGR_PATTERN.sub("", text)


def capture_screen(host: TmuxHost, session: str, strip: bool = True) -> str:
    """Capture the visible content of a session.

    Args:
        host: tmux host
        session: Session name
        strip: Remove SGR sequences (default True)

    Returns:
        Screen text

    Raises:
        CaptureFailedError: If the session is gone or tmux fails
    """
    content = host.capture(session, escapes=True)
    if strip:
        content = strip_sgr(content)
    return content
