# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Tests for screen capture normalization."""

import pytest

from tmuxmcp.core.capture import capture_screen, strip_sgr
from tmuxmcp.utils.exceptions import CaptureFailedError


class TestStripSgr:
    """Tests for strip_sgr."""

    def test_plain_text_unchanged(self):
        assert strip_sgr("hello\nworld\n") == "hello\nworld\n"

    def test_colours_removed(self):
        assert strip_sgr("\x1b[32mok\x1b[0m") == "ok"

    def test_compound_attributes_removed(self):
        assert strip_sgr("\x1b[1;38;5;196mred\x1b[m") == "red"

    def test_truecolor_removed(self):
        assert strip_sgr("\x1b[38;2;255;0;0mX\x1b[39m") == "X"

    def test_cursor_movement_passed_through(self):
        """Only SGR is removed; other CSI sequences are left alone."""
        assert strip_sgr("a\x1b[2Kb\x1b[3;4H") == "a\x1b[2Kb\x1b[3;4H"

    def test_osc_passed_through(self):
        text = "\x1b]8;;http://x\x07link\x1b]8;;\x07"
        assert strip_sgr(text) == text


class TestCaptureScreen:
    """Tests for capture_screen."""

    def test_strips_by_default(self, fake_host):
        fake_host.screens = ["\x1b[31merror\x1b[0m\n"]

        assert capture_screen(fake_host, "demo") == "error\n"
        assert fake_host.calls[-1] == ("capture", "demo", True)

    def test_raw_capture(self, fake_host):
        fake_host.screens = ["\x1b[31merror\x1b[0m\n"]

        assert capture_screen(fake_host, "demo", strip=False) == "\x1b[31merror\x1b[0m\n"

    def test_failure_propagates(self, fake_host):
        fake_host.fail_capture = True

        with pytest.raises(CaptureFailedError):
            capture_screen(fake_host, "demo")
