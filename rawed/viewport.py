# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

from dataclasses import dataclass

from rawed.rows import RowStore


@dataclass
class Viewport:
    screen_rows: int
    screen_cols: int
    row_offset: int = 0
    col_offset: int = 0
    render_x: int = 0

    def scroll(self, store: RowStore, cursor_y: int, cursor_x: int) -> None:
        """Move the offsets just enough to bring the cursor back on screen."""
        self.render_x = 0
        if cursor_y < store.num_rows:
            self.render_x = store[cursor_y].cx_to_rx(cursor_x)

        if cursor_y < self.row_offset:
            self.row_offset = cursor_y
        if cursor_y >= self.row_offset + self.screen_rows:
            self.row_offset = cursor_y - self.screen_rows + 1
        if self.render_x < self.col_offset:
            self.col_offset = self.render_x
        if self.render_x >= self.col_offset + self.screen_cols:
            self.col_offset = self.render_x - self.screen_cols + 1
