# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

import logging
import os
from typing import List

from rawed.rows import RowStore
from rawed.terminal import FatalError

logger = logging.getLogger(__name__)


def read_lines(path: str) -> List[bytes]:
    lines = []
    with open(path, "rb") as f:
        for line in f:
            lines.append(line.rstrip(b"\r\n"))
    return lines


def open_file(store: RowStore, path: str) -> None:
    """Load ``path`` into ``store``; a file that cannot be read ends the session."""
    store.filename = path
    try:
        lines = read_lines(path)
    except OSError as e:
        logger.error("Cannot open %s: %s", path, e)
        raise FatalError(f"fopen: {path}: {e.strerror or e}") from e
    store.load(lines)
    logger.info("Loaded %d rows from %s", store.num_rows, path)


def write_file(path: str, data: bytes) -> int:
    """Truncate ``path`` to the new length and write ``data`` over it."""
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
    try:
        os.ftruncate(fd, len(data))
        written = os.write(fd, data)
        if written != len(data):
            raise OSError(f"short write ({written} of {len(data)} bytes)")
    finally:
        os.close(fd)
    return len(data)


def save_file(store: RowStore) -> int:
    """Write the store back to its file and clear ``dirty``.

    Returns the number of bytes written. ``OSError`` propagates with the
    store left untouched.
    """
    if store.filename is None:
        return 0
    data = store.serialize()
    written = write_file(store.filename, data)
    store.dirty = False
    logger.info("Wrote %d bytes to %s", written, store.filename)
    return written
