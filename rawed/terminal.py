# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

import atexit
import copy
import errno
import logging
import os
import re
import sys
import termios
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

CLEAR_SCREEN = b"\x1b[2J\x1b[H"
CURSOR_TO_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
CURSOR_POSITION_REQUEST = b"\x1b[6n"

_CURSOR_REPORT = re.compile(rb"^\x1b\[(\d+);(\d+)$")


class FatalError(Exception):
    """Unrecoverable terminal or startup failure; the session must end."""


class Terminal:
    """Owns the controlling terminal for one editor session.

    Raw mode is entered with ``enable_raw_mode()`` (or the context manager)
    and is restored on leaving the ``with`` block and, as a last resort,
    by an ``atexit`` hook.
    """

    def __init__(self, fd_in: Optional[int] = None, fd_out: Optional[int] = None):
        self.fd_in = sys.stdin.fileno() if fd_in is None else fd_in
        self.fd_out = sys.stdout.fileno() if fd_out is None else fd_out
        self.orig_attrs = None

    def __enter__(self) -> "Terminal":
        self.enable_raw_mode()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disable_raw_mode()

    def enable_raw_mode(self) -> None:
        try:
            self.orig_attrs = termios.tcgetattr(self.fd_in)
        except termios.error as e:
            raise FatalError(f"tcgetattr: {e}") from e
        atexit.register(self.disable_raw_mode)

        raw = copy.deepcopy(self.orig_attrs)
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        # read() returns after 100ms even when nothing was typed
        raw[6][termios.VMIN] = 0
        raw[6][termios.VTIME] = 1
        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, raw)
        except termios.error as e:
            self.disable_raw_mode()
            raise FatalError(f"tcsetattr: {e}") from e
        logger.debug("Entered raw mode on fd %d", self.fd_in)

    def disable_raw_mode(self) -> None:
        if self.orig_attrs is None:
            return
        attrs, self.orig_attrs = self.orig_attrs, None
        atexit.unregister(self.disable_raw_mode)
        try:
            termios.tcsetattr(self.fd_in, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            logger.error("Could not restore terminal attributes: %s", e)
            return
        logger.debug("Restored terminal attributes on fd %d", self.fd_in)

    @property
    def is_raw(self) -> bool:
        return self.orig_attrs is not None

    def read_byte(self) -> bytes:
        """Read at most one byte; ``b""`` means the read timed out."""
        try:
            return os.read(self.fd_in, 1)
        except (BlockingIOError, InterruptedError):
            return b""
        except OSError as e:
            if e.errno == errno.EAGAIN:
                return b""
            raise FatalError(f"read: {e}") from e

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            written = os.write(self.fd_out, view)
            view = view[written:]

    def clear_screen(self) -> None:
        self.write(CLEAR_SCREEN)

    def _ioctl_window_size(self) -> Tuple[int, int]:
        size = os.get_terminal_size(self.fd_out)
        return size.lines, size.columns

    def get_window_size(self) -> Tuple[int, int]:
        try:
            rows, cols = self._ioctl_window_size()
        except OSError:
            rows, cols = 0, 0
        if cols > 0:
            return rows, cols

        logger.debug("Window size ioctl unavailable, asking the terminal for the cursor position")
        self.write(CURSOR_TO_BOTTOM_RIGHT)
        position = self.get_cursor_position()
        if position is None:
            raise FatalError("unable to determine the window size")
        return position

    def get_cursor_position(self) -> Optional[Tuple[int, int]]:
        self.write(CURSOR_POSITION_REQUEST)
        reply = bytearray()
        while len(reply) < 31:
            c = self.read_byte()
            if not c or c == b"R":
                break
            reply += c
        return parse_cursor_report(bytes(reply))


def parse_cursor_report(reply: bytes) -> Optional[Tuple[int, int]]:
    """Parse ``ESC [ rows ; cols`` (the trailing ``R`` already stripped)."""
    match = _CURSOR_REPORT.match(reply)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))
