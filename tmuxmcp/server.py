# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""tmuxmcp MCP server (FastMCP implementation).

Exposes terminal sessions to AI agents: start a tmux session, type into it,
read the screen back, and drive interactive prompts such as `git add -p`.
"""

from typing import Callable, List, Optional

from fastmcp import FastMCP

from tmuxmcp.core.sessions import SessionService
from tmuxmcp.utils.exceptions import TmuxMcpError
from tmuxmcp.utils.logging import get_logger

logger = get_logger(__name__)

INSTRUCTIONS = (
    "Terminal sessions backed by tmux. Start a session, send commands with "
    "send_commands (literal text plus <ENTER>, <CTRL+C>, <SLEEP 500ms> style "
    "tokens), read the screen with view_session, close it when done."
)


def _ok(output: str) -> dict:
    return {"success": True, "output": output}


def _error(prefix: str, error: Exception) -> dict:
    logger.warning(f"{prefix}: {error}")
    return {"success": False, "error": f"{prefix}: {error}"}


def _call(prefix: str, operation: Callable[[], str]) -> dict:
    try:
        return _ok(operation())
    except TmuxMcpError as e:
        return _error(prefix, e)


def create_server(service: SessionService) -> FastMCP:
    """Build the FastMCP server with all session tools registered."""
    mcp = FastMCP(name="tmuxmcp", instructions=INSTRUCTIONS)

    # ========================================================================
    # Session lifecycle
    # ========================================================================

    @mcp.tool()
    def start_session(
        session_name: str,
        command: Optional[str] = None,
        working_directory: Optional[str] = None,
    ) -> dict:
        """Start a new terminal session using tmux.

        Args:
            session_name: Name of the session to create
            command: Optional command to run (defaults to shell)
            working_directory: Working directory for the session
        """
        return _call(
            "Failed to start session",
            lambda: service.start_session(session_name, command, working_directory),
        )

    @mcp.tool()
    def list_sessions() -> dict:
        """List all active terminal sessions."""
        return _call("Failed to list sessions", service.list_sessions)

    @mcp.tool()
    def join_session(session_name: str, new_session_name: Optional[str] = None) -> dict:
        """Join an existing terminal session.

        Args:
            session_name: Name of the existing session to join
            new_session_name: Name for this client's view of the session (optional)
        """
        return _call(
            "Failed to join session",
            lambda: service.join_session(session_name, new_session_name),
        )

    @mcp.tool()
    def close_session(session_name: str) -> dict:
        """Close a terminal session.

        Args:
            session_name: Name of the session to close
        """
        return _call("Failed to close session", lambda: service.close_session(session_name))

    # ========================================================================
    # Input and output
    # ========================================================================

    @mcp.tool()
    def send_keys(session_name: str, keys: str) -> dict:
        """Send keystrokes to a terminal session.

        Keys are passed to tmux send-keys unchanged, so tmux key names such
        as Enter or C-c are interpreted by tmux.

        Args:
            session_name: Name of the session
            keys: Keys to send to the session
        """
        return _call("Failed to send keys", lambda: service.send_keys(session_name, keys))

    @mcp.tool()
    def send_commands(
        session_name: str,
        commands: List[str],
        default_delay_ms: Optional[int] = None,
        capture_screen: Optional[bool] = None,
    ) -> dict:
        """Send a sequence of commands and keystrokes to a terminal session.

        Literal strings are typed as-is. Special tokens in angle brackets:
        <ENTER> <ESC> <TAB> <BACKSPACE> <DELETE> <UP> <DOWN> <LEFT> <RIGHT>
        <HOME> <END> <PAGEUP> <PAGEDOWN> <SPACE>, <CTRL+X>, <ALT+X>,
        <SLEEP 500ms> and <SLEEP 2s>.

        Args:
            session_name: Name of the session
            commands: Array of commands to execute
            default_delay_ms: Delay between commands in milliseconds
                (default: delays.default_command_delay_ms from config, 100)
            capture_screen: Return the screen content after execution
                (default: capture.capture_after from config, true)
        """
        return _call(
            "Failed to send commands",
            lambda: service.send_commands(
                session_name, commands, default_delay_ms, capture_screen
            ).render(),
        )

    @mcp.tool()
    def view_session(session_name: str) -> dict:
        """View the current screen content of a terminal session.

        Args:
            session_name: Name of the session
        """
        return _call("Failed to capture session", lambda: service.view_session(session_name))

    # ========================================================================
    # Interactive git
    # ========================================================================

    @mcp.tool()
    def git_add_patch(
        working_directory: Optional[str] = None,
        args: Optional[List[str]] = None,
    ) -> dict:
        """Start interactive git staging (git add -p) and return an operation ID.

        Args:
            working_directory: Working directory for the git operation
            args: Additional arguments for git add -p (e.g. ["file1.txt", "*.js"])
        """
        return _call(
            "Failed to start git add -p",
            lambda: service.git_add_patch(working_directory, args),
        )

    @mcp.tool()
    def git_add_patch_respond(session_id: str, response: str) -> dict:
        """Send a response to an interactive git add -p operation.

        Args:
            session_id: Operation ID returned from git_add_patch
            response: 'y' (yes), 'n' (no), 's' (split), 'q' (quit), 'a' (all),
                      'd' (done), '?' (help)
        """
        return _call(
            "Failed to respond to git add -p",
            lambda: service.git_add_patch_respond(session_id, response),
        )

    return mcp
