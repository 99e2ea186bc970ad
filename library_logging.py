"""
library_logging.py

Activity log sinks for the book catalog.

The catalog reports every operation through a sink exposing
`log(level, message)`. Sinks write lines shaped like

    [2024-01-31 18:04:12] [INFO] Book '1984' added successfully.

and are built on top of the standard `logging` handlers and formatters, so a
console sink, an append-only file sink and a fan-out of several can be freely
combined. Writing to a sink never raises into the caller.
"""

from __future__ import annotations
import logging
import sys
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Protocol, TextIO, Union

# Configuration
DEFAULT_LOG_FILE = "library.log"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Operator-facing diagnostics (sink failures), separate from the activity log
logger = logging.getLogger("LibrarySystem")


class LogLevel(str, Enum):
    """Severity of a catalog activity line."""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def levelno(self) -> int:
        """Return the matching numeric level from the `logging` module."""
        return _LEVELNOS[self]

    @classmethod
    def parse(cls, level: Union["LogLevel", str]) -> Optional["LogLevel"]:
        """
        Convert a level name to a LogLevel.

        Returns None for anything outside INFO, WARNING and ERROR.
        """
        try:
            return cls(level)
        except ValueError:
            return None


_LEVELNOS: Dict[LogLevel, int] = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class LogSink(Protocol):
    """Anything the catalog can report to."""

    def log(self, level: Union[LogLevel, str], message: str) -> None:
        ...

    def close(self) -> None:
        ...


class BaseSink(ABC):
    """Shared context-manager behaviour; subclasses implement `log`."""

    @abstractmethod
    def log(self, level: Union[LogLevel, str], message: str) -> None:
        """Write one activity line. Must never raise into the caller."""

    def close(self) -> None:
        """Flush and release whatever the sink holds. Safe to call twice."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class NullSink(BaseSink):
    """Discards every line."""

    def log(self, level: Union[LogLevel, str], message: str) -> None:
        pass


class HandlerSink(BaseSink):
    """
    Sink writing through one or more `logging.Handler` objects.

    Records are handed straight to the handlers instead of going through a
    named logger, so every sink instance stays independent of the global
    logger tree. Lines with a level outside LogLevel are dropped and reported
    to the operator.
    """

    def __init__(self, handlers: List[logging.Handler]):
        formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
        for handler in handlers:
            handler.setFormatter(formatter)
        self._handlers = list(handlers)

    def log(self, level: Union[LogLevel, str], message: str) -> None:
        parsed = LogLevel.parse(level)
        if parsed is None:
            logger.warning("Dropping log line with unknown level %r: %s", level, message)
            return
        record = logging.makeLogRecord({
            "name": logger.name,
            "levelno": parsed.levelno,
            "levelname": parsed.value,
            "msg": message,
        })
        for handler in self._handlers:
            if record.levelno >= handler.level:
                handler.handle(record)

    def close(self) -> None:
        for handler in self._handlers:
            handler.close()
        self._handlers = []


class ConsoleSink(HandlerSink):
    """INFO lines go to stdout, WARNING and ERROR lines go to stderr."""

    def __init__(self, stream: Optional[TextIO] = None, err_stream: Optional[TextIO] = None):
        out_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        out_handler.addFilter(lambda record: record.levelno < logging.WARNING)
        err_handler = logging.StreamHandler(err_stream if err_stream is not None else sys.stderr)
        err_handler.setLevel(logging.WARNING)
        super().__init__([out_handler, err_handler])


class FileSink(HandlerSink):
    """
    Appends lines to a text file.

    If the file cannot be opened the failure is reported once to the operator
    and the sink silently drops everything afterwards.
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_LOG_FILE):
        self.path = Path(path)
        handlers: List[logging.Handler] = []
        try:
            handlers.append(logging.FileHandler(self.path, mode="a", encoding="utf-8"))
        except OSError as exc:
            logger.warning("Could not open log file %s: %s (file logging disabled)", self.path, exc)
        super().__init__(handlers)

    @property
    def available(self) -> bool:
        """Return True while the file is open for writing."""
        return bool(self._handlers)


class MultiSink(BaseSink):
    """Forwards each line to every wrapped sink, in order."""

    def __init__(self, *sinks: LogSink):
        self.sinks = tuple(sinks)

    def log(self, level: Union[LogLevel, str], message: str) -> None:
        for sink in self.sinks:
            sink.log(level, message)

    def close(self) -> None:
        for sink in self.sinks:
            sink.close()


def build_sink(console: bool = True, log_file: Optional[Union[str, Path]] = None) -> BaseSink:
    """
    Compose the sinks requested by the caller.

    Args:
        console: write lines to stdout/stderr.
        log_file: append lines to this file when given.

    Returns:
        A single sink, a MultiSink when both targets are requested, or a
        NullSink when neither is.
    """
    sinks: List[BaseSink] = []
    if console:
        sinks.append(ConsoleSink())
    if log_file is not None:
        sinks.append(FileSink(log_file))
    if not sinks:
        return NullSink()
    if len(sinks) == 1:
        return sinks[0]
    return MultiSink(*sinks)
