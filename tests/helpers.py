from __future__ import annotations

from typing import List, Tuple


class FakeTerminal:
    """Scripted stand-in for rawed.terminal.Terminal."""

    def __init__(self, keys: bytes = b"", size: Tuple[int, int] = (24, 80)):
        self.input = bytearray(keys)
        self.size = size
        self.frames: List[bytes] = []
        self.cleared = 0

    def feed(self, data: bytes) -> None:
        self.input += data

    def read_byte(self) -> bytes:
        if not self.input:
            return b""
        c = bytes(self.input[:1])
        del self.input[:1]
        return c

    def write(self, data: bytes) -> None:
        self.frames.append(bytes(data))

    def clear_screen(self) -> None:
        self.cleared += 1

    def get_window_size(self) -> Tuple[int, int]:
        return self.size


def byte_reader(data: bytes):
    """A read() callable returning one byte at a time, then timeouts."""
    remaining = bytearray(data)

    def read() -> bytes:
        if not remaining:
            return b""
        c = bytes(remaining[:1])
        del remaining[:1]
        return c

    return read
