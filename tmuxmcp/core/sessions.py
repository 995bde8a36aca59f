# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""High-level session operations exposed to MCP tools.

Each method returns the text shown to the agent or raises a TmuxMcpError
subclass with a readable message.
"""

from typing import List, Optional

from tmuxmcp.core.capture import capture_screen
from tmuxmcp.core.prompts import OperationStore, PromptTracker
from tmuxmcp.core.sequencer import SequenceResult, send_commands
from tmuxmcp.core.tmux import TmuxHost
from tmuxmcp.models.host_config import HostConfigModel


class SessionService:
    """Session lifecycle, command sequencing and interactive prompts."""

    def __init__(
        self,
        host: TmuxHost,
        tracker: Optional[PromptTracker] = None,
        default_delay_ms: int = 100,
        capture_after: bool = True,
        strip_ansi: bool = True,
    ):
        self.host = host
        self.tracker = tracker if tracker is not None else PromptTracker(host)
        self.default_delay_ms = default_delay_ms
        self.capture_after = capture_after
        self.strip_ansi = strip_ansi

    @classmethod
    def from_config(cls, config: HostConfigModel) -> "SessionService":
        host = TmuxHost.from_config(config)
        tracker = PromptTracker(
            host,
            store=OperationStore(),
            start_settle=config.delays.prompt_start_settle,
            respond_settle=config.delays.prompt_respond_settle,
        )
        return cls(
            host,
            tracker=tracker,
            default_delay_ms=config.delays.default_command_delay_ms,
            capture_after=config.capture.capture_after,
            strip_ansi=config.capture.strip_ansi,
        )

    def start_session(
        self,
        session_name: str,
        command: Optional[str] = None,
        working_directory: Optional[str] = None,
    ) -> str:
        self.host.create(session_name, command=command or None, working_dir=working_directory or None)
        return f"Session '{session_name}' started successfully"

    def send_keys(self, session_name: str, keys: str) -> str:
        self.host.send_keys(session_name, keys)
        return f"Keys sent to session '{session_name}'"

    def send_commands(
        self,
        session_name: str,
        commands: List[str],
        default_delay_ms: Optional[int] = None,
        capture_screen: Optional[bool] = None,
    ) -> SequenceResult:
        return send_commands(
            self.host,
            session_name,
            commands,
            delay_ms=self.default_delay_ms if default_delay_ms is None else default_delay_ms,
            capture=self.capture_after if capture_screen is None else capture_screen,
            strip_ansi=self.strip_ansi,
        )

    def view_session(self, session_name: str) -> str:
        return capture_screen(self.host, session_name, strip=self.strip_ansi)

    def list_sessions(self) -> str:
        return self.host.list_sessions()

    def join_session(self, session_name: str, new_session_name: Optional[str] = None) -> str:
        self.host.attach(session_name, new_name=new_session_name or None)
        if new_session_name:
            return f"Joined session '{session_name}' as '{new_session_name}'"
        return f"Joined session '{session_name}'"

    def close_session(self, session_name: str) -> str:
        self.host.destroy(session_name)
        return f"Session '{session_name}' closed successfully"

    def git_add_patch(
        self, working_directory: Optional[str] = None, args: Optional[List[str]] = None
    ) -> str:
        operation_id, screen = self.tracker.git_add_patch(working_dir=working_directory or None, args=args)
        return f"Git add -p started with session ID: {operation_id}\n\nCurrent screen:\n{screen}"

    def git_add_patch_respond(self, session_id: str, response: str) -> str:
        screen = self.tracker.respond(session_id, response)
        return f"Response '{response}' sent to git add -p operation.\n\nCurrent screen:\n{screen}"
