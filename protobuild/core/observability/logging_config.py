"""
Logging configuration — how build messages reach the operator.

Called once at startup by main.py. Build stages never print: warnings
and errors are logged, and the console handler renders them in the
build step's own voice, one line each, on stderr:

    compile.proto Missing executable: protoc
    compile.clean /app/lib/proto/a.pb.ex

The task label comes from the emitting module (see ``_TASKS``). On a
terminal, warnings are yellow and errors red.

Console verbosity: CLI flag > PROTOBUILD_LOG_LEVEL > WARNING. At INFO
and below each line also carries the time and logger name.
PROTOBUILD_LOG_FILE adds a plain-text file log at
PROTOBUILD_LOG_FILE_LEVEL (default: the console level).
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import click

DEFAULT_TASK = "compile.proto"

# Logger name prefix → task label shown on the console
_TASKS = {
    "protobuild.core.use_cases.clean": "compile.clean",
}

_COLORS = {
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


def task_for(logger_name: str) -> str:
    """Task label for records emitted by ``logger_name``."""
    for prefix, task in _TASKS.items():
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            return task
    return DEFAULT_TASK


class ConsoleFormatter(logging.Formatter):
    """``<task> <message>``, with time and origin when verbose."""

    def __init__(self, level: int, color: bool = False):
        if level <= logging.INFO:
            fmt = "%(asctime)s %(task)s [%(name)s] %(message)s"
        else:
            fmt = "%(task)s %(message)s"
        super().__init__(fmt, datefmt="%H:%M:%S")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        record.task = task_for(record.name)
        text = super().format(record)
        fg = _COLORS.get(record.levelno) if self.color else None
        return click.style(text, fg=fg) if fg else text


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Install the console handler (and optional file handler) on the root logger.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path to a log file.
        log_file_level: Level for the file; defaults to ``level``.
        stream: Console stream; defaults to the current ``sys.stderr``.
    """
    console_level = _parse_level(level)
    stream = stream or sys.stderr

    console = logging.StreamHandler(stream)
    console.setLevel(console_level)
    console.setFormatter(ConsoleFormatter(console_level, color=_isatty(stream)))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root_level = min(root_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def _isatty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _parse_level(level: str | None) -> int:
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
