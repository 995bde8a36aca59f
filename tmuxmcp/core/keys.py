# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT

"""Command token parsing and tmux key translation.

A token wrapped in angle brackets is symbolic, anything else is literal text:

    "echo hi"        -> Literal
    "<ENTER>"        -> NamedKey (tmux "Enter")
    "<CTRL+C>"       -> Modifier (tmux "C-c")
    "<SLEEP 500ms>"  -> Pause
    "<FOO>"          -> Unrecognized
"""

import re
import time
from dataclasses import dataclass
from typing import Callable, Union

from tmuxmcp.utils.exceptions import MalformedPauseError, UnknownTokenError

# Symbolic name -> tmux key name (case-sensitive on the left)
KEY_MAP = {
    "ENTER": "Enter",
    "ESC": "Escape",
    "TAB": "Tab",
    "BACKSPACE": "BSpace",
    "DELETE": "Delete",
    "UP": "Up",
    "DOWN": "Down",
    "LEFT": "Left",
    "RIGHT": "Right",
    "HOME": "Home",
    "END": "End",
    "PAGEUP": "PPage",
    "PAGEDOWN": "NPage",
    "SPACE": "Space",
}

# Modifier prefix -> tmux prefix
MODIFIERS = {
    "CTRL+": "C-",
    "ALT+": "M-",
}

PAUSE_PREFIX = "SLEEP "

# Milliseconds take a plain unsigned decimal integer
MILLIS_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Literal:
    """Raw text typed as-is."""

    text: str


@dataclass(frozen=True)
class NamedKey:
    """A key from KEY_MAP."""

    name: str

    @property
    def tmux_key(self) -> str:
        return KEY_MAP[self.name]


@dataclass(frozen=True)
class Modifier:
    """CTRL+X or ALT+X combination. Any key is accepted."""

    modifier: str
    key: str

    @property
    def tmux_key(self) -> str:
        return MODIFIERS[self.modifier] + self.key.lower()


@dataclass(frozen=True)
class Pause:
    """Timed pause. unit is "ms" or "s"."""

    amount: float
    unit: str

    @property
    def seconds(self) -> float:
        if self.unit == "ms":
            return self.amount / 1000.0
        return self.amount

    def wait(self, sleep: Callable[[float], None] = time.sleep) -> None:
        sleep(self.seconds)


@dataclass(frozen=True)
class Unrecognized:
    """Symbolic token with no mapping."""

    name: str


Token = Union[Literal, NamedKey, Modifier, Pause, Unrecognized]


def is_symbolic(raw: str) -> bool:
    """Check whether a raw token uses the <...> wrapper."""
    return len(raw) >= 2 and raw.startswith("<") and raw.endswith(">")


def parse_pause(text: str) -> Pause:
    """Parse the inner text of a pause token, e.g. "SLEEP 500ms".

    Raises:
        MalformedPauseError: If the shape, magnitude or unit is invalid
    """
    parts = text.split(" ")
    if len(parts) != 2 or parts[0] != PAUSE_PREFIX.strip():
        raise MalformedPauseError(f"invalid sleep command format: {text}")

    value = parts[1]
    if value.endswith("ms"):
        magnitude = value[:-2]
        if not MILLIS_PATTERN.fullmatch(magnitude):
            raise MalformedPauseError(f"invalid milliseconds value: {magnitude}")
        amount = float(int(magnitude))
        unit = "ms"
    elif value.endswith("s"):
        magnitude = value[:-1]
        if "_" in magnitude:
            raise MalformedPauseError(f"invalid seconds value: {magnitude}")
        try:
            amount = float(magnitude)
        except ValueError:
            raise MalformedPauseError(f"invalid seconds value: {magnitude}") from None
        unit = "s"
    else:
        raise MalformedPauseError(f"sleep time must end with 'ms' or 's': {value}")

    # float() accepts "nan" and "inf"; neither is a usable duration
    if not 0 <= amount < float("inf"):
        raise MalformedPauseError(f"sleep time must be a non-negative number: {value}")

    return Pause(amount=amount, unit=unit)


def parse_symbolic(name: str) -> Token:
    """Classify the inner name of a symbolic token (brackets removed)."""
    if name.startswith(PAUSE_PREFIX):
        return parse_pause(name)

    for prefix in MODIFIERS:
        if name.startswith(prefix):
            return Modifier(modifier=prefix, key=name[len(prefix):])

    if name in KEY_MAP:
        return NamedKey(name=name)

    return Unrecognized(name=name)


def parse_token(raw: str) -> Token:
    """Parse one raw command token into its variant.

    Raises:
        MalformedPauseError: For a SLEEP token that cannot be parsed
    """
    if is_symbolic(raw):
        return parse_symbolic(raw[1:-1])
    return Literal(text=raw)


def translate_key(name: str) -> str:
    """Resolve a symbolic name (brackets removed) to a tmux key name.

    Raises:
        UnknownTokenError: If the name has no mapping (pauses included)
    """
    token = parse_symbolic(name)
    if isinstance(token, (NamedKey, Modifier)):
        return token.tmux_key
    raise UnknownTokenError(f"unknown special command: <{name}>")
