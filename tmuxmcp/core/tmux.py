# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Low-level tmux operations.

Every method is one isolated `tmux` subprocess. TmuxHost keeps no session
state, so concurrent calls against different sessions are independent.
Nothing is retried; the first failure is raised to the caller.
"""

import shutil
import subprocess
import time
from typing import Callable, List, Optional

from tmuxmcp.utils.exceptions import (
    CaptureFailedError,
    CreateFailedError,
    HostUnavailableError,
    InjectFailedError,
    SessionNotFoundError,
    TmuxError,
    TmuxServerNotRunningError,
)
from tmuxmcp.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24
DEFAULT_SETTLE = 0.2
DEFAULT_TIMEOUT = 5.0

INSTALL_HINT = "Please install tmux: brew install tmux (macOS) or apt-get install tmux (Ubuntu)"


def ensure_tmux_available(binary: str = "tmux") -> str:
    """Verify tmux is installed and return its resolved path.

    Raises:
        HostUnavailableError: If the binary is not on PATH
    """
    path = shutil.which(binary)
    if path is None:
        raise HostUnavailableError(f"{binary} is required but not found in PATH")
    return path


def _session_target(name: str) -> str:
    # "=" disables tmux's prefix and fnmatch lookup of session names
    return f"={name}"


def _pane_target(name: str) -> str:
    return f"={name}:"


def _missing_session(stderr: str) -> bool:
    text = stderr.lower()
    return "can't find session" in text or "session not found" in text


def _no_server(stderr: str) -> bool:
    text = stderr.lower()
    return "no server running" in text or "error connecting to" in text


class TmuxHost:
    """Thin wrapper around the tmux command line."""

    def __init__(
        self,
        binary: str = "tmux",
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        create_settle: float = DEFAULT_SETTLE,
        attach_settle: float = DEFAULT_SETTLE,
        timeout: float = DEFAULT_TIMEOUT,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.binary = binary
        self.width = width
        self.height = height
        self.create_settle = create_settle
        self.attach_settle = attach_settle
        self.timeout = timeout
        self.sleep = sleep

    @classmethod
    def from_config(cls, config) -> "TmuxHost":
        """Build a host from a HostConfigModel."""
        return cls(
            binary=config.tmux.binary,
            width=config.tmux.width,
            height=config.tmux.height,
            create_settle=config.delays.create_settle,
            attach_settle=config.delays.attach_settle,
            timeout=config.timeouts.tmux_command,
        )

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        cmd = [self.binary, *args]
        logger.debug(f"Running: {cmd}")
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise HostUnavailableError(f"{self.binary} is required but not found in PATH") from e
        except subprocess.TimeoutExpired as e:
            raise TmuxError(f"tmux {args[0]} timed out after {self.timeout}s") from e

    @staticmethod
    def _describe(result: subprocess.CompletedProcess) -> str:
        stderr = (result.stderr or "").strip()
        if stderr:
            return stderr
        return f"exit status {result.returncode}"

    def session_exists(self, name: str) -> bool:
        """Check whether tmux knows a session with this name."""
        result = self._run(["has-session", "-t", _session_target(name)])
        return result.returncode == 0

    def create(
        self,
        name: str,
        command: Optional[str] = None,
        working_dir: Optional[str] = None,
        settle: Optional[float] = None,
    ) -> None:
        """Create a detached session, optionally running `command`.

        Raises:
            CreateFailedError: If tmux rejects the session (e.g. duplicate name)
        """
        args = ["new-session", "-d", "-s", name, "-x", str(self.width), "-y", str(self.height)]
        if working_dir:
            args += ["-c", working_dir]
        if command:
            args.append(command)

        result = self._run(args)
        if result.returncode != 0:
            logger.warning(f"Failed to create session '{name}': {self._describe(result)}")
            raise CreateFailedError(f"failed to create tmux session: {self._describe(result)}")

        logger.info(f"Created session '{name}'")
        # The spawned program needs a moment before its output shows up
        self.sleep(self.create_settle if settle is None else settle)

    def inject_literal(self, name: str, text: str) -> None:
        """Type `text` into the session verbatim (send-keys -l)."""
        result = self._run(["send-keys", "-l", "-t", _pane_target(name), "--", text])
        if result.returncode != 0:
            raise InjectFailedError(f"failed to send literal text: {self._describe(result)}")

    def inject_key(self, name: str, key: str) -> None:
        """Send one tmux key name (e.g. "Enter", "C-c")."""
        result = self._run(["send-keys", "-t", _pane_target(name), key])
        if result.returncode != 0:
            raise InjectFailedError(f"failed to send key {key}: {self._describe(result)}")

    def send_keys(self, name: str, keys: str) -> None:
        """Send keys without -l, so tmux interprets key names itself."""
        result = self._run(["send-keys", "-t", _pane_target(name), "--", keys])
        if result.returncode != 0:
            raise InjectFailedError(f"failed to send keys: {self._describe(result)}")

    def capture(self, name: str, escapes: bool = True) -> str:
        """Return the visible pane content, with escape sequences if `escapes`."""
        args = ["capture-pane", "-t", _pane_target(name), "-p"]
        if escapes:
            args.insert(3, "-e")
        result = self._run(args)
        if result.returncode != 0:
            raise CaptureFailedError(f"failed to capture screen: {self._describe(result)}")
        return result.stdout

    def list_sessions(self) -> str:
        """Return the raw `tmux list-sessions` output."""
        result = self._run(["list-sessions"])
        if result.returncode != 0:
            if _no_server(result.stderr or ""):
                raise TmuxServerNotRunningError(f"failed to list sessions: {self._describe(result)}")
            raise TmuxError(f"failed to list sessions: {self._describe(result)}")
        return result.stdout

    def attach(self, name: str, new_name: Optional[str] = None, settle: Optional[float] = None) -> None:
        """Join an existing session, optionally as a grouped session `new_name`.

        Raises:
            SessionNotFoundError: If `name` does not exist
            CreateFailedError: If the grouped session cannot be created
        """
        if not self.session_exists(name):
            raise SessionNotFoundError(f"session '{name}' does not exist")

        if new_name:
            result = self._run(["new-session", "-d", "-s", new_name, "-t", _session_target(name)])
            if result.returncode != 0:
                raise CreateFailedError(f"failed to create shared session: {self._describe(result)}")
            logger.info(f"Joined session '{name}' as '{new_name}'")

        self.sleep(self.attach_settle if settle is None else settle)

    def destroy(self, name: str) -> None:
        """Kill a session.

        Raises:
            SessionNotFoundError: If tmux reports the session missing
            TmuxError: For any other failure
        """
        result = self._run(["kill-session", "-t", _session_target(name)])
        if result.returncode != 0:
            stderr = result.stderr or ""
            if _missing_session(stderr) or _no_server(stderr):
                raise SessionNotFoundError(f"session '{name}' does not exist")
            raise TmuxError(f"failed to close session: {self._describe(result)}")
        logger.info(f"Closed session '{name}'")
