# src/taskly/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskly.log"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(name: str | int | None, default: int = logging.INFO) -> int:
    """Map 'debug' / 'WARNING' / 10 to a logging level; unknown names give `default`."""
    if isinstance(name, int):
        return name
    if not name:
        return default
    return logging.getLevelNamesMapping().get(str(name).strip().upper(), default)


class _ConsoleFilter(logging.Filter):
    """
    What reaches the terminal while the REPL is running:
    - taskly.* records at the handler's level
    - captured Python warnings at WARNING+, except HydrationWarning: the
      store already logs a readable line for it, the raw warning goes to the file only
    - third-party loggers only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "taskly" or name.startswith("taskly."):
            return True

        if name == "py.warnings":
            if "HydrationWarning" in record.getMessage():
                return False
            return record.levelno >= logging.WARNING

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskly",
    console_level: str | int = logging.INFO,
    file_level: str | int = logging.DEBUG,
) -> Path:
    """
    Console handler (filtered, at `console_level`) + file handler with everything
    at `file_level` in `<log_dir>/taskly.log`. Levels may be names ("debug").

    Replaces any handlers already on the root logger, so calling it twice is safe.
    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolve_level(console_level))
    console.setFormatter(fmt)
    console.addFilter(_ConsoleFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(resolve_level(file_level, logging.DEBUG))
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # HydrationWarning and friends become 'py.warnings' records.
    logging.captureWarnings(True)

    return log_file
