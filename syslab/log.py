"""Leveled log messages with pluggable output strategies."""

from __future__ import annotations

import enum
import inspect
import os
import sys
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

SEPARATOR = "\r\n"
DEFAULT_LOG_DIR = "./Log"
DEFAULT_LOG_FILE = "my.log"


class LogLevel(enum.Enum):
    """Severity of a log message."""

    DEBUG = enum.auto()
    INFO = enum.auto()
    ERROR = enum.auto()
    WARNING = enum.auto()
    FATAL = enum.auto()


def level_name(level: Any) -> str:
    """Return the printable name of a level, or ``UNKNOWN``."""
    if isinstance(level, LogLevel):
        return level.name
    return "UNKNOWN"


def timestamp(when: datetime | None = None) -> str:
    """Format a moment (default: now) as ``YYYY-MM-DD-HH-MM-SS``."""
    if when is None:
        when = datetime.now()
    return (
        f"{when.year:4d}-{when.month:02d}-{when.day:02d}-"
        f"{when.hour:02d}-{when.minute:02d}-{when.second:02d}"
    )


class LogStrategy(ABC):
    """Where finished log messages go."""

    @abstractmethod
    def emit(self, message: str) -> None:
        """Write one finished message."""


class ScreenStrategy(LogStrategy):
    """Writes messages to a text stream, standard output by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def emit(self, message: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        with self._lock:
            print(message + SEPARATOR, file=stream, flush=True)


class FileStrategy(LogStrategy):
    """Appends messages to a file, creating its directory if needed."""

    def __init__(self, path: str | os.PathLike = DEFAULT_LOG_DIR,
                 filename: str = DEFAULT_LOG_FILE) -> None:
        self.path = Path(path)
        self.filename = filename
        self._lock = threading.Lock()
        with self._lock:
            if self.path.exists():
                return
            try:
                self.path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                print(f"{exc}\n")

    @property
    def target(self) -> Path:
        return self.path / self.filename

    def emit(self, message: str) -> None:
        with self._lock:
            try:
                with open(self.target, "a", encoding="utf-8", newline="") as out:
                    out.write(message + SEPARATOR)
            except OSError:
                return


class LogMessage:
    """One log line under construction; emitted once when flushed."""

    def __init__(self, level: LogLevel, filename: str, line: int, logger: Logger) -> None:
        self.level = level
        self.filename = filename
        self.line = line
        self._logger = logger
        self._flushed = False
        self.text = (
            f"[{timestamp()}][{level_name(level)}][{filename}]"
            f"[{os.getpid()}][{line}]"
        )

    def __lshift__(self, value: Any) -> LogMessage:
        self.text += str(value)
        return self

    def flush(self) -> None:
        """Hand the message to the logger's strategy (only the first time)."""
        if self._flushed:
            return
        self._flushed = True
        self._logger.strategy.emit(self.text)

    def __enter__(self) -> LogMessage:
        return self

    def __exit__(self, *args: Any) -> None:
        self.flush()

    def __del__(self) -> None:
        try:
            self.flush()
        except Exception:
            pass


class Logger:
    """Builds log messages and routes them to the current strategy."""

    def __init__(self, strategy: LogStrategy | None = None) -> None:
        self.strategy: LogStrategy = strategy if strategy is not None else ScreenStrategy()

    def enable_screen_strategy(self) -> None:
        self.strategy = ScreenStrategy()

    def enable_file_strategy(self, path: str | os.PathLike = DEFAULT_LOG_DIR,
                             filename: str = DEFAULT_LOG_FILE) -> None:
        self.strategy = FileStrategy(path, filename)

    def __call__(self, level: LogLevel, filename: str, line: int) -> LogMessage:
        return LogMessage(level, filename, line, self)

    def log(self, level: LogLevel, *args: Any) -> str:
        """Emit a message tagged with the caller's file and line; return its text."""
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if caller is not None:
            filename, line = caller.f_code.co_filename, caller.f_lineno
        else:
            filename, line = "?", 0
        del frame, caller
        message = self(level, filename, line)
        for arg in args:
            message << arg
        message.flush()
        return message.text


logger = Logger()