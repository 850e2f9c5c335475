# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

import logging
import time
from typing import Optional

from rawed.config import EditorConfig
from rawed.fileio import open_file, save_file
from rawed.keys import ENTER, Key, KeyCode, KeyDecoder, ctrl, key_label
from rawed.rows import RowStore
from rawed.screen import StatusMessage, build_frame
from rawed.viewport import Viewport

logger = logging.getLogger(__name__)

MOVEMENT_KEYS = (Key.ARROW_UP, Key.ARROW_DOWN, Key.ARROW_LEFT, Key.ARROW_RIGHT)
DELETE_KEYS = (Key.BACKSPACE, ctrl("h"), Key.DELETE)


class Editor:
    """One editing session: the text, the cursor and the view onto them.

    ``terminal`` must provide ``read_byte()``, ``write()``,
    ``clear_screen()`` and ``get_window_size()``.
    """

    def __init__(self, terminal, config: Optional[EditorConfig] = None):
        self.terminal = terminal
        self.config = config or EditorConfig()
        self.store = RowStore(tab_stop=self.config.tab_stop)
        self.cursor_x = 0
        self.cursor_y = 0
        rows, cols = terminal.get_window_size()
        # two lines for the status and message bars
        self.viewport = Viewport(screen_rows=max(1, rows - 2), screen_cols=max(1, cols))
        self.status = StatusMessage()
        self.quit_times = self.config.quit_times
        self.running = True
        self.key_decoder = KeyDecoder(terminal.read_byte)
        self.key_bindings = self.config.key_bindings
        self.action_map = {k: action for action, keys in self.key_bindings.items() for k in keys}

    @property
    def screen_rows(self) -> int:
        return self.viewport.screen_rows

    def open(self, path: str) -> None:
        open_file(self.store, path)

    def set_status_message(self, text: str) -> None:
        self.status.set(text)

    def help_text(self) -> str:
        save = key_label(self.key_bindings["save"][0]) if self.key_bindings["save"] else "?"
        quit_ = key_label(self.key_bindings["quit"][0]) if self.key_bindings["quit"] else "?"
        return f"HELP: {save} = save | {quit_} = quit"

    # -- editing -------------------------------------------------------------

    def insert_char(self, c: int) -> None:
        self.store.insert_char(self.cursor_y, self.cursor_x, c)
        self.cursor_x += 1

    def insert_newline(self) -> None:
        if self.cursor_x == 0:
            self.store.insert_row(self.cursor_y, b"")
        else:
            self.store.split_row(self.cursor_y, self.cursor_x)
        self.cursor_y += 1
        self.cursor_x = 0

    def delete_char(self) -> None:
        if self.cursor_y == self.store.num_rows:
            return
        if self.cursor_x == 0 and self.cursor_y == 0:
            return

        if self.cursor_x > 0:
            self.store.delete_char(self.cursor_y, self.cursor_x)
            self.cursor_x -= 1
        else:
            row = self.store[self.cursor_y]
            self.cursor_x = self.store[self.cursor_y - 1].size
            self.store.append_string(self.cursor_y - 1, bytes(row.chars))
            self.store.delete_row(self.cursor_y)
            self.cursor_y -= 1

    def save(self) -> None:
        if self.store.filename is None:
            return
        try:
            written = save_file(self.store)
        except OSError as e:
            logger.warning("Saving %s failed: %s", self.store.filename, e)
            self.set_status_message(f"Can't save! I/O error: {e.strerror or e}")
            return
        self.set_status_message(f"{written} bytes written to disk")

    # -- cursor movement -----------------------------------------------------

    def _current_row(self):
        if self.cursor_y >= self.store.num_rows:
            return None
        return self.store[self.cursor_y]

    def move_cursor(self, key: KeyCode) -> None:
        row = self._current_row()
        if key == Key.ARROW_LEFT:
            if self.cursor_x != 0:
                self.cursor_x -= 1
            elif self.cursor_y > 0:
                self.cursor_y -= 1
                self.cursor_x = self.store[self.cursor_y].size
        elif key == Key.ARROW_RIGHT:
            if row is not None and self.cursor_x < row.size:
                self.cursor_x += 1
            elif row is not None and self.cursor_x == row.size:
                self.cursor_y += 1
                self.cursor_x = 0
        elif key == Key.ARROW_UP:
            if self.cursor_y != 0:
                self.cursor_y -= 1
        elif key == Key.ARROW_DOWN:
            if self.cursor_y < self.store.num_rows:
                self.cursor_y += 1

        row = self._current_row()
        row_len = row.size if row is not None else 0
        if self.cursor_x > row_len:
            self.cursor_x = row_len

    def page(self, key: KeyCode) -> None:
        if key == Key.PAGE_UP:
            self.cursor_y = self.viewport.row_offset
            direction = Key.ARROW_UP
        else:
            self.cursor_y = min(self.viewport.row_offset + self.screen_rows - 1, self.store.num_rows)
            direction = Key.ARROW_DOWN
        for _ in range(self.screen_rows):
            self.move_cursor(direction)

    # -- input dispatch ------------------------------------------------------

    def handle_keypress(self, key: KeyCode) -> None:
        action = self.action_map.get(key)

        if action == "quit":
            if self.store.dirty and self.quit_times > 1:
                self.quit_times -= 1
                self.set_status_message(
                    f"WARNING!!! File has unsaved changes. "
                    f"Press {key_label(key)} {self.quit_times} more times to quit."
                )
                return
            self.terminal.clear_screen()
            self.running = False
            return
        elif action == "save":
            self.save()
        elif action == "refresh":
            pass
        elif key == ENTER:
            self.insert_newline()
        elif key == Key.HOME:
            self.cursor_x = 0
        elif key == Key.END:
            row = self._current_row()
            if row is not None:
                self.cursor_x = row.size
        elif key in DELETE_KEYS:
            if key == Key.DELETE:
                self.move_cursor(Key.ARROW_RIGHT)
            self.delete_char()
        elif key in (Key.PAGE_UP, Key.PAGE_DOWN):
            self.page(key)
        elif key in MOVEMENT_KEYS:
            self.move_cursor(key)
        elif is_insertable(key):
            self.insert_char(key)

        self.quit_times = self.config.quit_times

    def process_keypress(self) -> None:
        self.handle_keypress(self.key_decoder.read_key())

    # -- output --------------------------------------------------------------

    def refresh_screen(self, now: Optional[float] = None) -> None:
        self.viewport.scroll(self.store, self.cursor_y, self.cursor_x)
        frame = build_frame(
            self.store, self.viewport, self.cursor_y, self.status,
            now=time.time() if now is None else now,
            timeout=self.config.message_timeout,
        )
        self.terminal.write(frame)

    def run(self) -> None:
        self.set_status_message(self.help_text())
        while self.running:
            self.refresh_screen()
            self.process_keypress()


def is_insertable(key: KeyCode) -> bool:
    if isinstance(key, Key):
        return False
    return key == ord("\t") or 0x20 <= key < 0x7f or 0x80 <= key <= 0xff
