# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Shared fixtures for tmuxmcp tests."""

import threading

import pytest

from tmuxmcp.utils.exceptions import CaptureFailedError, InjectFailedError


class FakeHost:
    """In-memory stand-in for TmuxHost that records every call."""

    def __init__(self):
        self.calls = []
        self.screens = []
        self.default_screen = "$ \n"
        self.fail_on_literal = set()
        self.fail_capture = False
        self._lock = threading.Lock()

    def _record(self, *call):
        with self._lock:
            self.calls.append(call)

    def create(self, name, command=None, working_dir=None, settle=None):
        self._record("create", name, command, working_dir)

    def inject_literal(self, name, text):
        self._record("literal", name, text)
        if text in self.fail_on_literal:
            raise InjectFailedError(f"failed to send literal text: {text}")

    def inject_key(self, name, key):
        self._record("key", name, key)

    def send_keys(self, name, keys):
        self._record("send_keys", name, keys)

    def capture(self, name, escapes=True):
        self._record("capture", name, escapes)
        if self.fail_capture:
            raise CaptureFailedError("failed to capture screen: can't find session")
        with self._lock:
            if self.screens:
                return self.screens.pop(0)
        return self.default_screen

    def list_sessions(self):
        self._record("list")
        return "demo: 1 windows (created Mon Oct 19 10:00:00 2026)\n"

    def attach(self, name, new_name=None, settle=None):
        self._record("attach", name, new_name)

    def destroy(self, name):
        self._record("destroy", name)

    def sent(self):
        """Calls that reached the session as input, in order."""
        return [c for c in self.calls if c[0] in ("literal", "key", "send_keys")]


class FakeSleep:
    """Records requested sleeps instead of waiting."""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)

    @property
    def total(self):
        return sum(self.calls)


@pytest.fixture
def fake_host():
    return FakeHost()


@pytest.fixture
def fake_sleep():
    return FakeSleep()
