# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

import logging
from enum import Enum, IntEnum, auto
from typing import Callable, Union

logger = logging.getLogger(__name__)

ESC = 0x1b
ENTER = ord("\r")


def ctrl(k: str) -> int:
    return ord(k) & 0x1f


class Key(IntEnum):
    BACKSPACE = 127
    ARROW_LEFT = 1000
    ARROW_RIGHT = 1001
    ARROW_UP = 1002
    ARROW_DOWN = 1003
    DELETE = 1004
    HOME = 1005
    END = 1006
    PAGE_UP = 1007
    PAGE_DOWN = 1008


# A decoded key is either a member of Key or a raw byte value.
KeyCode = Union[Key, int]

KEY_NAMES = {
    "esc": ESC, "escape": ESC, "enter": ENTER, "tab": ord("\t"),
    "backspace": Key.BACKSPACE, "delete": Key.DELETE,
    "up": Key.ARROW_UP, "down": Key.ARROW_DOWN,
    "left": Key.ARROW_LEFT, "right": Key.ARROW_RIGHT,
    "home": Key.HOME, "end": Key.END,
    "pageup": Key.PAGE_UP, "pagedown": Key.PAGE_DOWN,
}


def parse_key_name(name: str) -> KeyCode:
    """Turn ``"ctrl-q"``, ``"esc"`` or a single character into a key code."""
    lowered = name.strip().lower()
    if lowered in KEY_NAMES:
        return KEY_NAMES[lowered]
    for prefix in ("ctrl-", "ctrl+", "^"):
        if lowered.startswith(prefix) and len(lowered) == len(prefix) + 1:
            return ctrl(lowered[-1])
    if len(name) == 1:
        return ord(name)
    raise ValueError(f"unknown key name: {name!r}")


def key_label(key: KeyCode) -> str:
    if isinstance(key, Key):
        return key.name.replace("ARROW_", "").title()
    if key == ESC:
        return "Esc"
    if key < 0x20:
        return f"Ctrl-{chr(key + 0x40)}"
    return chr(key)


class DecodeState(Enum):
    START = auto()
    GOT_ESC = auto()
    GOT_BRACKET = auto()
    GOT_DIGIT = auto()
    GOT_O = auto()
    GOT_OTHER = auto()


CSI_LETTERS = {
    ord("A"): Key.ARROW_UP, ord("B"): Key.ARROW_DOWN,
    ord("C"): Key.ARROW_RIGHT, ord("D"): Key.ARROW_LEFT,
    ord("H"): Key.HOME, ord("F"): Key.END,
}
CSI_TILDE = {
    ord("1"): Key.HOME, ord("7"): Key.HOME,
    ord("3"): Key.DELETE,
    ord("4"): Key.END, ord("8"): Key.END,
    ord("5"): Key.PAGE_UP, ord("6"): Key.PAGE_DOWN,
}
SS3_LETTERS = {ord("H"): Key.HOME, ord("F"): Key.END}


class KeyDecoder:
    """Turns a byte stream into logical key presses.

    ``read`` must return one byte, or ``b""`` when its timeout expired with
    nothing to read. Escape sequences are decoded by a small state machine
    that consumes one byte per transition. Two bytes are always read after
    ``ESC`` (a third for ``ESC [ digit ~``); a timeout on any of them or an
    unrecognized sequence comes out as a bare ``ESC``.
    """

    def __init__(self, read: Callable[[], bytes]):
        self._read = read

    def read_key(self) -> KeyCode:
        c = self._read()
        while not c:
            c = self._read()
        byte = c[0]
        if byte == Key.BACKSPACE:
            return Key.BACKSPACE
        if byte != ESC:
            return byte
        return self._decode_escape()

    def _decode_escape(self) -> KeyCode:
        state = DecodeState.GOT_ESC
        seq = bytearray()
        while True:
            c = self._read()
            if not c:
                return ESC
            byte = c[0]
            seq.append(byte)

            if state is DecodeState.GOT_ESC:
                if byte == ord("["):
                    state = DecodeState.GOT_BRACKET
                elif byte == ord("O"):
                    state = DecodeState.GOT_O
                else:
                    state = DecodeState.GOT_OTHER
            elif state is DecodeState.GOT_BRACKET:
                if ord("0") <= byte <= ord("9"):
                    state = DecodeState.GOT_DIGIT
                elif byte in CSI_LETTERS:
                    return CSI_LETTERS[byte]
                else:
                    break
            elif state is DecodeState.GOT_DIGIT:
                if byte == ord("~") and seq[1] in CSI_TILDE:
                    return CSI_TILDE[seq[1]]
                break
            elif state is DecodeState.GOT_O:
                if byte in SS3_LETTERS:
                    return SS3_LETTERS[byte]
                break
            else:
                break

        logger.debug("Unrecognized escape sequence %r", bytes(seq))
        return ESC
