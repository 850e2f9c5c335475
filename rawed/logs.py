# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

import logging
import logging.handlers
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s"


def setup_logging(log_file: Optional[str] = None, level: str = "WARNING") -> None:
    """Point the root logger at ``log_file``, or at nothing.

    Output never goes to the console: the terminal belongs to the editor
    while it runs.
    """
    root_logger = logging.getLogger()
    for old in root_logger.handlers:
        if isinstance(old, logging.handlers.RotatingFileHandler):
            old.close()
    root_logger.handlers = []

    handler: logging.Handler = logging.NullHandler()
    if log_file:
        try:
            handler = logging.handlers.RotatingFileHandler(
                log_file, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
        except OSError as e:
            print(f"rawed: cannot open log file {log_file!r}: {e}", file=sys.stderr)
            handler = logging.NullHandler()

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
