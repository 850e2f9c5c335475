# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional

from rawed import __version__
from rawed.rows import RowStore
from rawed.viewport import Viewport

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
INVERT_ON = b"\x1b[7m"
INVERT_OFF = b"\x1b[m"

FILENAME_WIDTH = 20
MESSAGE_TIMEOUT = 5.0


@dataclass
class StatusMessage:
    text: str = ""
    set_at: float = 0.0

    def set(self, text: str, now: Optional[float] = None) -> None:
        self.text = text
        self.set_at = time.time() if now is None else now

    def visible(self, now: float, timeout: float = MESSAGE_TIMEOUT) -> bool:
        return bool(self.text) and now - self.set_at < timeout


def welcome_line(screen_cols: int) -> bytes:
    welcome = f"rawed editor -- version {__version__}".encode()[:screen_cols]
    padding = (screen_cols - len(welcome)) // 2
    line = bytearray()
    if padding:
        line += b"~"
        padding -= 1
    line += b" " * padding
    line += welcome
    return bytes(line)


def draw_rows(out: List[bytes], store: RowStore, view: Viewport) -> None:
    for y in range(view.screen_rows):
        file_row = y + view.row_offset
        if file_row >= store.num_rows:
            if store.num_rows == 0 and y == view.screen_rows // 3:
                out.append(welcome_line(view.screen_cols))
            else:
                out.append(b"~")
        else:
            render = store[file_row].render
            out.append(render[view.col_offset:view.col_offset + view.screen_cols])
        out.append(CLEAR_LINE)
        out.append(b"\r\n")


def draw_status_bar(out: List[bytes], store: RowStore, view: Viewport, cursor_y: int) -> None:
    name = (store.filename or "[No Name]")[:FILENAME_WIDTH]
    modified = "(modified)" if store.dirty else ""
    left = f"{name} - {store.num_rows} lines {modified}".encode("utf-8", "replace")
    right = f"{cursor_y + 1}/{store.num_rows}".encode()

    left = left[:view.screen_cols]
    padding = view.screen_cols - len(left)
    if padding >= len(right):
        status = left + b" " * (padding - len(right)) + right
    else:
        status = left + b" " * padding

    out.append(INVERT_ON)
    out.append(status)
    out.append(INVERT_OFF)
    out.append(b"\r\n")


def draw_message_bar(out: List[bytes], view: Viewport, message: StatusMessage,
                     now: float, timeout: float = MESSAGE_TIMEOUT) -> None:
    out.append(CLEAR_LINE)
    if message.visible(now, timeout):
        out.append(message.text.encode("utf-8", "replace")[:view.screen_cols])


def build_frame(store: RowStore, view: Viewport, cursor_y: int, message: StatusMessage,
                now: Optional[float] = None, timeout: float = MESSAGE_TIMEOUT) -> bytes:
    """Compose one full screen update; the caller writes it in one go."""
    if now is None:
        now = time.time()
    out: List[bytes] = [HIDE_CURSOR, CURSOR_HOME]

    draw_rows(out, store, view)
    draw_status_bar(out, store, view, cursor_y)
    draw_message_bar(out, view, message, now, timeout)

    draw_y = cursor_y - view.row_offset + 1
    draw_x = view.render_x - view.col_offset + 1
    out.append(f"\x1b[{draw_y};{draw_x}H".encode())
    out.append(SHOW_CURSOR)
    return b"".join(out)
