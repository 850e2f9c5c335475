# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

from typing import Iterable, List, Optional

TAB_STOP = 8
TAB = ord("\t")


def expand_tabs(chars: bytes, tab_stop: int = TAB_STOP) -> bytes:
    render = bytearray()
    for c in chars:
        if c == TAB:
            render.append(ord(" "))
            while len(render) % tab_stop != 0:
                render.append(ord(" "))
        else:
            render.append(c)
    return bytes(render)


def raw_to_render_column(chars: bytes, raw_col: int, tab_stop: int = TAB_STOP) -> int:
    rx = 0
    for c in chars[:raw_col]:
        if c == TAB:
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


class Row:
    """One line of text: the stored bytes plus their tab-expanded form."""

    __slots__ = ("chars", "render", "tab_stop")

    def __init__(self, chars: bytes = b"", tab_stop: int = TAB_STOP):
        self.chars = bytearray(chars)
        self.tab_stop = tab_stop
        self.render = b""
        self.update()

    def update(self) -> None:
        self.render = expand_tabs(self.chars, self.tab_stop)

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def cx_to_rx(self, cx: int) -> int:
        return raw_to_render_column(self.chars, cx, self.tab_stop)

    def __repr__(self) -> str:
        return f"Row({bytes(self.chars)!r})"


class RowStore:
    """All text of the open file, in presentation order."""

    def __init__(self, filename: Optional[str] = None, tab_stop: int = TAB_STOP):
        self.rows: List[Row] = []
        self.dirty = False
        self.filename = filename
        self.tab_stop = tab_stop

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    def load(self, lines: Iterable[bytes]) -> None:
        self.rows = [Row(line, self.tab_stop) for line in lines]
        self.dirty = False

    def insert_row(self, at: int, chars: bytes = b"") -> None:
        at = max(0, min(at, len(self.rows)))
        self.rows.insert(at, Row(chars, self.tab_stop))
        self.dirty = True

    def append_row(self, chars: bytes = b"") -> None:
        self.insert_row(len(self.rows), chars)

    def delete_row(self, at: int) -> None:
        if at < 0 or at >= len(self.rows):
            return
        del self.rows[at]
        self.dirty = True

    def insert_char(self, row_index: int, col: int, c: int) -> None:
        if row_index == len(self.rows):
            self.append_row(b"")
        row = self.rows[row_index]
        if col < 0 or col > row.size:
            col = row.size
        row.chars.insert(col, c)
        row.update()
        self.dirty = True

    def delete_char(self, row_index: int, col: int) -> None:
        """Remove the byte just before ``col``."""
        if row_index < 0 or row_index >= len(self.rows):
            return
        row = self.rows[row_index]
        if col <= 0 or col > row.size:
            return
        del row.chars[col - 1]
        row.update()
        self.dirty = True

    def append_string(self, row_index: int, s: bytes) -> None:
        row = self.rows[row_index]
        row.chars += s
        row.update()
        self.dirty = True

    def split_row(self, row_index: int, col: int) -> None:
        row = self.rows[row_index]
        tail = bytes(row.chars[col:])
        del row.chars[col:]
        row.update()
        self.insert_row(row_index + 1, tail)

    def serialize(self) -> bytes:
        return b"".join(bytes(row.chars) + b"\n" for row in self.rows)
