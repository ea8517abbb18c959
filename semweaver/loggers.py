"""Loggers used to report progress, warnings and errors."""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TextIO


class Logger(ABC):
    """The interface shared by all loggers."""

    @abstractmethod
    def trace(self, message: str) -> None:
        """Log a trace message (only with debug enabled)."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Log an info message."""

    @abstractmethod
    def warn(self, message: str) -> None:
        """Log a warning message."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Log an error message."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Log a success message."""

    @abstractmethod
    def newline(self, count: int) -> None:
        """Emit blank lines."""

    @abstractmethod
    def indent(self, count: int) -> None:
        """Indent the next message."""

    @abstractmethod
    def done(self) -> None:
        """Stop a loading message."""

    @abstractmethod
    def add_style(self, name: str, styles: list[str]) -> Logger:
        """Register a named style."""

    @abstractmethod
    def loading(self, message: str) -> None:
        """Log a loading message."""

    @abstractmethod
    def same(self) -> Logger:
        """Keep the next message on the current line."""

    @abstractmethod
    def log(self, message: str) -> None:
        """Log a message without icon."""

    @abstractmethod
    def mute(self) -> None:
        """Mute all messages except warnings and errors."""


_INFO_ICON = "ℹ"
_WARN_ICON = "⚠"
_ERROR_ICON = "✖"
_SUCCESS_ICON = "✔"
_LOADING_ICON = "…"


class _ConsoleWriter:
    """Thread-safe terminal writer with icons, indentation and line control."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._out = out
        self._err = err
        self._lock = threading.Lock()
        self._same_line = False
        self._pending_indent = 0
        self._loading = False
        self.styles: dict[str, list[str]] = {}

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def _finish_loading(self) -> None:
        if self._loading:
            self.out.write("\n")
            self.out.flush()
            self._loading = False

    def _write(self, stream: TextIO, icon: str, message: str, *, keep_line: bool = False) -> None:
        with self._lock:
            self._finish_loading()
            prefix = "\t" * self._pending_indent
            self._pending_indent = 0
            text = f"{prefix}{icon} {message}" if icon else f"{prefix}{message}"
            end = "" if (self._same_line or keep_line) else "\n"
            self._same_line = False
            stream.write(text + end)
            stream.flush()

    def info(self, message: str) -> None:
        self._write(self.out, _INFO_ICON, message)

    def warn(self, message: str) -> None:
        self._write(self.out, _WARN_ICON, message)

    def error(self, message: str) -> None:
        self._write(self.err, _ERROR_ICON, message)

    def success(self, message: str) -> None:
        self._write(self.out, _SUCCESS_ICON, message)

    def log(self, message: str) -> None:
        self._write(self.out, "", message)

    def loading(self, message: str) -> None:
        self._write(self.out, _LOADING_ICON, message, keep_line=True)
        with self._lock:
            self._loading = True

    def done(self) -> None:
        with self._lock:
            self._finish_loading()

    def newline(self, count: int) -> None:
        with self._lock:
            self._finish_loading()
            self.out.write("\n" * count)
            self.out.flush()

    def indent(self, count: int) -> None:
        with self._lock:
            self._pending_indent = count

    def same(self) -> None:
        with self._lock:
            self._same_line = True

    def add_style(self, name: str, styles: list[str]) -> None:
        with self._lock:
            self.styles[name] = list(styles)


class ConsoleLogger(Logger):
    """Logs to the console; can be muted down to warnings and errors."""

    def __init__(
        self,
        debug_level: int = 0,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self._writer = _ConsoleWriter(out, err)
        self.debug_level = debug_level
        self._muted = threading.Event()

    @property
    def muted(self) -> bool:
        return self._muted.is_set()

    def trace(self, message: str) -> None:
        if self.debug_level > 0 and not self.muted:
            self._writer.log(message)

    def info(self, message: str) -> None:
        if not self.muted:
            self._writer.info(message)

    def warn(self, message: str) -> None:
        self._writer.warn(message)

    def error(self, message: str) -> None:
        self._writer.error(message)

    def success(self, message: str) -> None:
        if not self.muted:
            self._writer.success(message)

    def newline(self, count: int) -> None:
        if not self.muted:
            self._writer.newline(count)

    def indent(self, count: int) -> None:
        if not self.muted:
            self._writer.indent(count)

    def done(self) -> None:
        if not self.muted:
            self._writer.done()

    def add_style(self, name: str, styles: list[str]) -> ConsoleLogger:
        if not self.muted:
            self._writer.add_style(name, styles)
        return self

    def loading(self, message: str) -> None:
        if not self.muted:
            self._writer.loading(message)

    def same(self) -> ConsoleLogger:
        if not self.muted:
            self._writer.same()
        return self

    def log(self, message: str) -> None:
        if not self.muted:
            self._writer.log(message)

    def mute(self) -> None:
        self._muted.set()


class NullLogger(Logger):
    """A logger that discards everything."""

    def trace(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warn(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def newline(self, count: int) -> None:
        pass

    def indent(self, count: int) -> None:
        pass

    def done(self) -> None:
        pass

    def add_style(self, name: str, styles: list[str]) -> NullLogger:
        return self

    def loading(self, message: str) -> None:
        pass

    def same(self) -> NullLogger:
        return self

    def log(self, message: str) -> None:
        pass

    def mute(self) -> None:
        pass


class TestLogger(Logger):
    """Console logger for tests that counts warnings and errors."""

    __test__ = False

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._writer = _ConsoleWriter(out, err)
        self._lock = threading.Lock()
        self._warn_count = 0
        self._error_count = 0

    def warn_count(self) -> int:
        """Number of warnings logged."""
        with self._lock:
            return self._warn_count

    def error_count(self) -> int:
        """Number of errors logged."""
        with self._lock:
            return self._error_count

    def trace(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        self._writer.info(message)

    def warn(self, message: str) -> None:
        self._writer.warn(message)
        with self._lock:
            self._warn_count += 1

    def error(self, message: str) -> None:
        self._writer.error(message)
        with self._lock:
            self._error_count += 1

    def success(self, message: str) -> None:
        self._writer.success(message)

    def newline(self, count: int) -> None:
        self._writer.newline(count)

    def indent(self, count: int) -> None:
        self._writer.indent(count)

    def done(self) -> None:
        self._writer.done()

    def add_style(self, name: str, styles: list[str]) -> TestLogger:
        self._writer.add_style(name, styles)
        return self

    def loading(self, message: str) -> None:
        self._writer.loading(message)

    def same(self) -> TestLogger:
        self._writer.same()
        return self

    def log(self, message: str) -> None:
        self._writer.log(message)

    def mute(self) -> None:
        pass


class QuietLogger(Logger):
    """Logs only warnings and errors to the console."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self._writer = _ConsoleWriter(out, err)

    def trace(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warn(self, message: str) -> None:
        self._writer.warn(message)

    def error(self, message: str) -> None:
        self._writer.error(message)

    def success(self, message: str) -> None:
        pass

    def newline(self, count: int) -> None:
        pass

    def indent(self, count: int) -> None:
        pass

    def done(self) -> None:
        self._writer.done()

    def add_style(self, name: str, styles: list[str]) -> QuietLogger:
        return self

    def loading(self, message: str) -> None:
        pass

    def same(self) -> QuietLogger:
        return self

    def log(self, message: str) -> None:
        pass

    def mute(self) -> None:
        pass


class LogKind(Enum):
    """The kind of a recorded log message."""

    TRACE = "trace"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    SUCCESS = "success"
    LOADING = "loading"
    LOG = "log"


@dataclass(frozen=True)
class LogMessage:
    """A recorded log message."""

    kind: LogKind
    text: str


class InMemoryLogger(Logger):
    """Records messages in memory instead of printing them."""

    def __init__(self, debug_level: int = 0) -> None:
        self.debug_level = debug_level
        self._lock = threading.Lock()
        self._messages: list[LogMessage] = []

    def _record(self, kind: LogKind, message: str) -> None:
        with self._lock:
            self._messages.append(LogMessage(kind, message))

    def _count(self, kind: LogKind) -> int:
        with self._lock:
            return sum(1 for message in self._messages if message.kind is kind)

    def warn_count(self) -> int:
        """Number of warnings recorded."""
        return self._count(LogKind.WARN)

    def error_count(self) -> int:
        """Number of errors recorded."""
        return self._count(LogKind.ERROR)

    def messages(self) -> list[LogMessage]:
        """A copy of the recorded messages, oldest first."""
        with self._lock:
            return list(self._messages)

    def trace(self, message: str) -> None:
        if self.debug_level > 0:
            self._record(LogKind.TRACE, message)

    def info(self, message: str) -> None:
        self._record(LogKind.INFO, message)

    def warn(self, message: str) -> None:
        self._record(LogKind.WARN, message)

    def error(self, message: str) -> None:
        self._record(LogKind.ERROR, message)

    def success(self, message: str) -> None:
        self._record(LogKind.SUCCESS, message)

    def newline(self, count: int) -> None:
        pass

    def indent(self, count: int) -> None:
        pass

    def done(self) -> None:
        pass

    def add_style(self, name: str, styles: list[str]) -> InMemoryLogger:
        return self

    def loading(self, message: str) -> None:
        self._record(LogKind.LOADING, message)

    def same(self) -> InMemoryLogger:
        return self

    def log(self, message: str) -> None:
        self._record(LogKind.LOG, message)

    def mute(self) -> None:
        pass