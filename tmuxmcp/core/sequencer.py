# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Execute ordered command token sequences against a session."""

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from tmuxmcp.core.capture import capture_screen
from tmuxmcp.core.keys import Literal, Modifier, NamedKey, Pause, Unrecognized, parse_token
from tmuxmcp.core.tmux import TmuxHost
from tmuxmcp.utils.exceptions import (
    CaptureFailedError,
    SequenceError,
    TmuxMcpError,
    UnknownTokenError,
)
from tmuxmcp.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DELAY_MS = 100


@dataclass
class SequenceResult:
    """Outcome of a successful send_commands call."""

    session: str
    total: int
    executed: int
    screen: Optional[str] = None
    capture_warning: Optional[str] = None

    def render(self) -> str:
        """Format the human-readable execution report."""
        lines = [
            f"Executing {self.total} commands on session '{self.session}':\n",
            "Commands executed successfully.\n",
        ]
        if self.capture_warning is not None:
            lines.append(f"Warning: Failed to capture screen: {self.capture_warning}\n")
        elif self.screen is not None:
            lines.append("\nScreen content:\n")
            lines.append(self.screen)
        return "".join(lines)


def _execute(host: TmuxHost, session: str, raw: str, sleep: Callable[[float], None]) -> bool:
    """Run a single token. Returns True if it was a pause."""
    token = parse_token(raw)
    if isinstance(token, Pause):
        token.wait(sleep)
        return True
    if isinstance(token, (NamedKey, Modifier)):
        host.inject_key(session, token.tmux_key)
    elif isinstance(token, Literal):
        host.inject_literal(session, token.text)
    elif isinstance(token, Unrecognized):
        raise UnknownTokenError(f"unknown special command: {raw}")
    return False


def send_commands(
    host: TmuxHost,
    session: str,
    commands: Iterable[str],
    delay_ms: int = DEFAULT_DELAY_MS,
    capture: bool = True,
    strip_ansi: bool = True,
    sleep: Callable[[float], None] = time.sleep,
) -> SequenceResult:
    """Send a sequence of literal text and <SPECIAL> tokens to a session.

    Tokens run in order. The first failure aborts the sequence and raises
    SequenceError with the 1-based index of the failing token. Every
    non-pause token is followed by `delay_ms` of pacing. When `capture` is
    set the screen is captured at the end; a capture failure is reported as
    a warning on the result.

    Args:
        host: tmux host
        session: Target session name
        commands: Raw tokens
        delay_ms: Pause between tokens in milliseconds
        capture: Capture the screen after the last token
        strip_ansi: Strip SGR sequences from the capture
        sleep: Sleep function (injectable for tests)

    Returns:
        SequenceResult

    Raises:
        SequenceError: On the first token that fails
    """
    commands = list(commands)
    logger.debug(f"Executing {len(commands)} commands on session '{session}'")

    for index, raw in enumerate(commands, start=1):
        try:
            was_pause = _execute(host, session, raw, sleep)
        except TmuxMcpError as e:
            logger.warning(f"Command {index} ('{raw}') failed on '{session}': {e}")
            raise SequenceError(index, raw, e) from e

        if delay_ms > 0 and not was_pause:
            sleep(delay_ms / 1000.0)

    result = SequenceResult(session=session, total=len(commands), executed=len(commands))

    if capture:
        try:
            result.screen = capture_screen(host, session, strip=strip_ansi)
        except CaptureFailedError as e:
            logger.warning(f"Capture after commands failed on '{session}': {e}")
            result.capture_warning = str(e)

    return result
