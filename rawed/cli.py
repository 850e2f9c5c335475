# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

import argparse
import logging
import sys
import traceback

from rawed import __version__
from rawed.config import LOG_LEVELS, ConfigError, load_config
from rawed.editor import Editor
from rawed.logs import setup_logging
from rawed.terminal import CLEAR_SCREEN, FatalError, Terminal

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rawed", description="rawed - a minimal raw-mode text editor")
    parser.add_argument("file", nargs="?", help="File to edit")
    parser.add_argument("--config", metavar="PATH", help="Path to a TOML config file")
    parser.add_argument("--log-file", metavar="PATH", help="Write a debug log to PATH")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper,
                        help="Log level for --log-file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"rawed: {e}", file=sys.stderr)
        return 2
    if args.log_file:
        config.log_file = args.log_file
    if args.log_level:
        config.log_level = args.log_level
    setup_logging(config.log_file, config.log_level)

    terminal = Terminal()
    try:
        with terminal:
            editor = Editor(terminal, config)
            if args.file:
                editor.open(args.file)
            editor.run()
    except FatalError as e:
        logger.error("Fatal: %s", e)
        sys.stdout.buffer.write(CLEAR_SCREEN)
        sys.stdout.flush()
        print(f"rawed: {e}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Editor crashed")
        sys.stdout.buffer.write(CLEAR_SCREEN)
        sys.stdout.flush()
        print("rawed crashed. Please report this issue.", file=sys.stderr)
        traceback.print_exc()
        return 1
    return 0


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
