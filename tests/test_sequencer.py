# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Tests for command sequencing."""

import pytest

from tmuxmcp.core.sequencer import SequenceResult, send_commands
from tmuxmcp.utils.exceptions import (
    InjectFailedError,
    MalformedPauseError,
    SequenceError,
    UnknownTokenError,
)


class TestDispatch:
    """Tokens reach the host through the right channel."""

    def test_literals_and_keys(self, fake_host, fake_sleep):
        send_commands(
            fake_host, "demo", ["echo hi", "<ENTER>", "<CTRL+C>"], capture=False, sleep=fake_sleep
        )

        assert fake_host.sent() == [
            ("literal", "demo", "echo hi"),
            ("key", "demo", "Enter"),
            ("key", "demo", "C-c"),
        ]

    def test_literal_is_byte_identical(self, fake_host, fake_sleep):
        """Literal text is never reinterpreted."""
        text = "printf '%s\\n' \"ENTER\" C-c ünïcødé\t"
        send_commands(fake_host, "demo", [text], capture=False, sleep=fake_sleep)

        assert fake_host.sent() == [("literal", "demo", text)]

    def test_empty_sequence(self, fake_host, fake_sleep):
        result = send_commands(fake_host, "demo", [], capture=False, sleep=fake_sleep)

        assert result.executed == 0
        assert fake_host.sent() == []
        assert fake_sleep.calls == []


class TestPacing:
    """Inter-token delay and pause handling."""

    def test_default_delay_after_each_token(self, fake_host, fake_sleep):
        send_commands(fake_host, "demo", ["a", "<ENTER>"], capture=False, sleep=fake_sleep)

        assert fake_sleep.calls == [0.1, 0.1]

    def test_zero_delay_disables_pacing(self, fake_host, fake_sleep):
        send_commands(fake_host, "demo", ["a", "b"], delay_ms=0, capture=False, sleep=fake_sleep)

        assert fake_sleep.calls == []

    def test_pause_exempt_from_delay(self, fake_host, fake_sleep):
        """<SLEEP 500ms> waits 0.5s and adds no extra pacing."""
        send_commands(
            fake_host, "demo", ["a", "<SLEEP 500ms>", "b"], delay_ms=250, capture=False, sleep=fake_sleep
        )

        assert fake_sleep.calls == [0.25, 0.5, 0.25]

    def test_pause_seconds(self, fake_host, fake_sleep):
        send_commands(fake_host, "demo", ["<SLEEP 2s>"], capture=False, sleep=fake_sleep)

        assert fake_sleep.calls == [2.0]
        assert fake_host.sent() == []


class TestFailFast:
    """The first failure aborts the sequence."""

    def test_failing_token_three_of_five(self, fake_host, fake_sleep):
        fake_host.fail_on_literal.add("three")

        with pytest.raises(SequenceError) as exc_info:
            send_commands(
                fake_host, "demo", ["one", "two", "three", "four", "five"], sleep=fake_sleep
            )

        error = exc_info.value
        assert error.index == 3
        assert error.token == "three"
        assert isinstance(error.cause, InjectFailedError)
        assert "command 3 ('three')" in str(error)
        sent_texts = [call[2] for call in fake_host.sent()]
        assert sent_texts == ["one", "two", "three"]
        assert not any(call[0] == "capture" for call in fake_host.calls)

    def test_unknown_token(self, fake_host, fake_sleep):
        with pytest.raises(SequenceError) as exc_info:
            send_commands(fake_host, "demo", ["ls", "<WHAT>", "pwd"], sleep=fake_sleep)

        assert exc_info.value.index == 2
        assert isinstance(exc_info.value.cause, UnknownTokenError)
        assert fake_host.sent() == [("literal", "demo", "ls")]

    def test_malformed_pause(self, fake_host, fake_sleep):
        with pytest.raises(SequenceError) as exc_info:
            send_commands(fake_host, "demo", ["<SLEEP soon>"], sleep=fake_sleep)

        assert exc_info.value.index == 1
        assert isinstance(exc_info.value.cause, MalformedPauseError)


class TestCaptureAfter:
    """Trailing screen capture."""

    def test_capture_included(self, fake_host, fake_sleep):
        fake_host.screens = ["\x1b[1m$ echo hi\x1b[0m\nhi\n"]

        result = send_commands(fake_host, "demo", ["echo hi", "<ENTER>"], sleep=fake_sleep)

        assert result.screen == "$ echo hi\nhi\n"
        assert result.capture_warning is None

    def test_capture_disabled(self, fake_host, fake_sleep):
        result = send_commands(fake_host, "demo", ["x"], capture=False, sleep=fake_sleep)

        assert result.screen is None
        assert not any(call[0] == "capture" for call in fake_host.calls)

    def test_capture_failure_is_warning(self, fake_host, fake_sleep):
        """The sequence already succeeded, so capture failure does not raise."""
        fake_host.fail_capture = True

        result = send_commands(fake_host, "demo", ["x"], sleep=fake_sleep)

        assert result.executed == 1
        assert "can't find session" in result.capture_warning


class TestSequenceResult:
    """Rendering of the text report."""

    def test_render_with_screen(self):
        result = SequenceResult(session="demo", total=2, executed=2, screen="hi\n")

        assert result.render() == (
            "Executing 2 commands on session 'demo':\n"
            "Commands executed successfully.\n"
            "\nScreen content:\n"
            "hi\n"
        )

    def test_render_with_warning(self):
        result = SequenceResult(session="demo", total=1, executed=1, capture_warning="gone")

        assert result.render().endswith("Warning: Failed to capture screen: gone\n")

    def test_render_without_capture(self):
        result = SequenceResult(session="demo", total=1, executed=1)

        assert "Screen content" not in result.render()
