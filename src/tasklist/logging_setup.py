# src/tasklist/logging_setup.py

"""
Logging for the interactive task console.

The REPL prints its own confirmations ("Added: ...", stats line), so the
console handler only shows what the user cannot see otherwise. The log file
under the data dir keeps everything, including per-mutation store chatter.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tasklist.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Already echoed by the console (task store) or too low-level (storage backends).
_ECHOED_PREFIXES = ("tasklist.tasks.task_store", "tasklist.storage.")


def parse_level(name: str | int | None, default: int = logging.INFO) -> int:
    """'debug' / 'INFO' / 20 -> logging level; unknown names give `default`."""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name or "").strip().upper())
    return level if isinstance(level, int) else default


class _ConsoleFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("tasklist."):
            # Third-party and py.warnings.
            return record.levelno >= logging.ERROR
        if name.startswith(_ECHOED_PREFIXES):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    level: str | int = "INFO",
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the console + file handlers on the root logger and return the log file path.

    Call once, before the store is built, so hydration problems reach the log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(parse_level(level))
    console.setFormatter(fmt)
    console.addFilter(_ConsoleFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
