# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Multi-round driving of line-oriented interactive programs.

An interactive operation runs one command in its own tmux session with an
exit sentinel appended:

    git add -p; echo "EXIT_STATUS:$?"

Each respond() types a line, captures the screen and looks for the
sentinel. EXIT_STATUS:0 moves the operation to "finished", any other code
to "error". Both are terminal.
"""

import re
import shlex
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from tmuxmcp.core.capture import capture_screen
from tmuxmcp.core.tmux import TmuxHost
from tmuxmcp.utils.exceptions import InvalidStateError, SessionNotFoundError, TmuxMcpError
from tmuxmcp.utils.logging import get_logger

logger = get_logger(__name__)

SENTINEL = "EXIT_STATUS:"
SENTINEL_PATTERN = re.compile(re.escape(SENTINEL) + r"(\d+)")
EXECUTE_KEY = "Enter"

GIT_ADD_PATCH_COMMAND = "git add -p"
GIT_ADD_PATCH_PREFIX = "git-add-patch"


class OperationStatus(str, Enum):
    ACTIVE = "active"
    FINISHED = "finished"
    ERROR = "error"


@dataclass
class PromptOperation:
    """State of one interactive operation."""

    operation_id: str
    session_name: str
    command: str
    working_dir: Optional[str] = None
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    status: OperationStatus = OperationStatus.ACTIVE
    exit_code: Optional[int] = None


class ReadWriteLock:
    """Many concurrent readers or one writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class OperationStore:
    """In-memory id -> PromptOperation map, lives as long as the process."""

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self._operations: Dict[str, PromptOperation] = {}
        self._lock = ReadWriteLock()
        self._clock = clock
        self._last_stamp = 0

    def new_id(self, prefix: str) -> str:
        """Generate a time-based id that is unique within this store."""
        with self._lock.write():
            stamp = max(self._clock(), self._last_stamp + 1)
            self._last_stamp = stamp
            return f"{prefix}-{stamp}"

    def add(self, operation: PromptOperation) -> None:
        with self._lock.write():
            self._operations[operation.operation_id] = operation

    def get(self, operation_id: str) -> Optional[PromptOperation]:
        """Return a snapshot of the operation, or None."""
        with self._lock.read():
            operation = self._operations.get(operation_id)
            return replace(operation) if operation else None

    def list(self) -> List[PromptOperation]:
        with self._lock.read():
            return [replace(op) for op in self._operations.values()]

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._operations)

    def finish(self, operation_id: str, exit_code: Optional[int]) -> Optional[PromptOperation]:
        """Move an active operation to finished (exit 0) or error.

        exit_code None means the operation failed without reporting a code.
        Terminal states are never overwritten.
        """
        with self._lock.write():
            operation = self._operations.get(operation_id)
            if operation is None:
                return None
            if operation.status == OperationStatus.ACTIVE:
                operation.exit_code = exit_code
                operation.status = (
                    OperationStatus.FINISHED if exit_code == 0 else OperationStatus.ERROR
                )
            return replace(operation)


def find_exit_code(screen: str) -> Optional[int]:
    """Return the last EXIT_STATUS:<n> code on screen, or None."""
    matches = SENTINEL_PATTERN.findall(screen)
    if not matches:
        return None
    return int(matches[-1])


def build_command_line(command: str, args: Optional[Sequence[str]] = None) -> Tuple[str, str]:
    """Assemble the command and its sentinel-wrapped shell line.

    Returns:
        (command, command_line)
    """
    if args:
        command = f"{command} {' '.join(shlex.quote(arg) for arg in args)}"
    return command, f'{command}; echo "{SENTINEL}$?"'


class PromptTracker:
    """Start and respond to interactive operations.

    Args:
        host: tmux host
        store: Operation store shared by all callers of this tracker
        start_settle: Wait after launching the command, in seconds
        respond_settle: Wait after each response, in seconds
        sleep: Sleep function (injectable for tests)
    """

    def __init__(
        self,
        host: TmuxHost,
        store: Optional[OperationStore] = None,
        start_settle: float = 0.3,
        respond_settle: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.host = host
        self.store = store if store is not None else OperationStore()
        self.start_settle = start_settle
        self.respond_settle = respond_settle
        self.sleep = sleep

    def start(
        self,
        command: str,
        working_dir: Optional[str] = None,
        args: Optional[Sequence[str]] = None,
        prefix: str = "prompt",
    ) -> Tuple[str, str]:
        """Launch `command` in a fresh session and return (operation_id, screen)."""
        operation_id = self.store.new_id(prefix)
        command, command_line = build_command_line(command, args)

        self.host.create(operation_id, working_dir=working_dir)
        self.store.add(
            PromptOperation(
                operation_id=operation_id,
                session_name=operation_id,
                command=command,
                working_dir=working_dir,
            )
        )
        logger.info(f"Started interactive operation {operation_id}: {command}")

        try:
            self.host.inject_literal(operation_id, command_line)
            self.host.inject_key(operation_id, EXECUTE_KEY)
            self.sleep(self.start_settle)
            screen = capture_screen(self.host, operation_id)
        except TmuxMcpError:
            self.store.finish(operation_id, None)
            raise

        return operation_id, screen

    def respond(self, operation_id: str, response: str) -> str:
        """Type one response line and return the screen afterwards.

        Raises:
            SessionNotFoundError: Unknown operation id
            InvalidStateError: Operation already finished or failed
        """
        operation = self.store.get(operation_id)
        if operation is None:
            raise SessionNotFoundError(f"operation with session ID '{operation_id}' not found")
        if operation.status != OperationStatus.ACTIVE:
            raise InvalidStateError(
                f"operation '{operation_id}' is not active (status: {operation.status.value})"
            )

        self.host.inject_literal(operation.session_name, response)
        self.host.inject_key(operation.session_name, EXECUTE_KEY)
        self.sleep(self.respond_settle)
        screen = capture_screen(self.host, operation.session_name)

        exit_code = find_exit_code(screen)
        if exit_code is not None:
            updated = self.store.finish(operation_id, exit_code)
            logger.info(f"Operation {operation_id} ended with status {updated.status.value}")

        return screen

    def get(self, operation_id: str) -> Optional[PromptOperation]:
        return self.store.get(operation_id)

    def git_add_patch(
        self, working_dir: Optional[str] = None, args: Optional[Sequence[str]] = None
    ) -> Tuple[str, str]:
        """Start `git add -p [args]`."""
        return self.start(
            GIT_ADD_PATCH_COMMAND, working_dir=working_dir, args=args, prefix=GIT_ADD_PATCH_PREFIX
        )
