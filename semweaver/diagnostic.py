"""Serializable diagnostic messages built from errors."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from semweaver.loggers import Logger

_RESET = "\x1b[0m"
_BOLD = "\x1b[1m"
_CYAN = "\x1b[36m"


class Severity(Enum):
    """How serious a diagnostic is."""

    ADVICE = "Advice"
    WARNING = "Warning"
    ERROR = "Error"

    @classmethod
    def _missing_(cls, value: object) -> Severity | None:
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


_SEVERITY_STYLE = {
    Severity.ERROR: ("\x1b[31m", "×"),
    Severity.WARNING: ("\x1b[33m", "⚠"),
    Severity.ADVICE: ("\x1b[36m", "☞"),
}


@dataclass(frozen=True)
class LabeledSpan:
    """A labelled region of the source a diagnostic refers to."""

    label: str | None
    offset: int
    length: int
    primary: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "span": {"offset": self.offset, "length": self.length},
            "primary": self.primary,
        }


@dataclass(frozen=True)
class DiagnosticInfo:
    """The displayable part of a diagnostic message."""

    message: str
    ansi_message: str
    code: str | None = None
    severity: Severity | None = None
    help: str | None = None
    url: str | None = None
    labels: list[LabeledSpan] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "message": self.message,
            "ansi_message": self.ansi_message,
        }
        if self.code is not None:
            result["code"] = self.code
        if self.severity is not None:
            result["severity"] = self.severity.value
        if self.help is not None:
            result["help"] = self.help
        if self.url is not None:
            result["url"] = self.url
        if self.labels is not None:
            result["labels"] = [label.to_dict() for label in self.labels]
        return result


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        if isinstance(value, Enum):
            return _jsonable(value.value)
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        return str(value)
    return value


def _error_to_json(error: BaseException) -> Any:
    to_dict = getattr(error, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {
        name: _jsonable(value)
        for name, value in vars(error).items()
        if not name.startswith("_")
    }


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _render(info_message: str, code: str | None, severity: Severity | None,
            help_text: str | None, url: str | None) -> str:
    colour, icon = _SEVERITY_STYLE[severity or Severity.ERROR]
    lines: list[str] = []
    if code is not None:
        lines.append(f"{colour}{_BOLD}{code}{_RESET}")
        lines.append("")
    lines.append(f"  {colour}{icon}{_RESET} {info_message}")
    if help_text is not None:
        lines.append(f"  {_CYAN}help:{_RESET} {help_text}")
    if url is not None:
        lines.append(f"  {_CYAN}see:{_RESET} {url}")
    return "\n".join(lines)


@dataclass(frozen=True)
class DiagnosticMessage:
    """An error paired with its displayable diagnostic."""

    error: Any
    diagnostic: DiagnosticInfo

    @classmethod
    def from_error(cls, error: BaseException) -> DiagnosticMessage:
        """Build a diagnostic from an exception.

        The optional attributes ``code``, ``severity``, ``help``, ``url`` and
        ``labels`` of the exception are picked up when present.
        """
        message = str(error)
        code = _optional_str(getattr(error, "code", None))
        raw_severity = getattr(error, "severity", None)
        severity = None if raw_severity is None else Severity(raw_severity)
        help_text = _optional_str(getattr(error, "help", None))
        url = _optional_str(getattr(error, "url", None))
        raw_labels = getattr(error, "labels", None)
        labels = None if raw_labels is None else list(raw_labels)
        info = DiagnosticInfo(
            message=message,
            ansi_message=_render(message, code, severity, help_text, url),
            code=code,
            severity=severity,
            help=help_text,
            url=url,
            labels=labels,
        )
        return cls(error=_error_to_json(error), diagnostic=info)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "diagnostic": self.diagnostic.to_dict()}


class DiagnosticMessages(Exception):
    """A list of diagnostic messages; can be raised as a whole."""

    def __init__(self, messages: Iterable[DiagnosticMessage] = ()) -> None:
        self._messages = list(messages)
        super().__init__()

    def __str__(self) -> str:
        return "\n\n".join(message.diagnostic.message for message in self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[DiagnosticMessage]:
        return iter(self._messages)

    def __getitem__(self, index: int) -> DiagnosticMessage:
        return self._messages[index]

    @property
    def messages(self) -> list[DiagnosticMessage]:
        return list(self._messages)

    @classmethod
    def empty(cls) -> DiagnosticMessages:
        return cls()

    @classmethod
    def from_errors(cls, errors: Iterable[BaseException]) -> DiagnosticMessages:
        return cls(DiagnosticMessage.from_error(error) for error in errors)

    @classmethod
    def from_error(cls, error: BaseException) -> DiagnosticMessages:
        return cls([DiagnosticMessage.from_error(error)])

    def extend(self, other: Iterable[DiagnosticMessage]) -> None:
        """Append the messages of ``other``."""
        self._messages.extend(list(other))

    def log(self, logger: Logger) -> None:
        """Log every message as an error."""
        for message in self._messages:
            logger.error(message.diagnostic.message)

    def has_error(self) -> bool:
        """True unless every message is explicitly a warning or an advice."""
        return any(
            message.diagnostic.severity not in (Severity.WARNING, Severity.ADVICE)
            for message in self._messages
        )

    def is_empty(self) -> bool:
        return not self._messages

    def to_json(self) -> str:
        return json.dumps([message.to_dict() for message in self._messages])


def _into_messages(error: BaseException) -> DiagnosticMessages:
    if isinstance(error, DiagnosticMessages):
        return DiagnosticMessages(error)
    nested = getattr(error, "errors", None)
    if isinstance(nested, list) and nested and all(
        isinstance(item, BaseException) for item in nested
    ):
        result = DiagnosticMessages()
        for item in nested:
            result.extend(_into_messages(item))
        return result
    return DiagnosticMessages.from_error(error)


@contextmanager
def capture_diagnostics(diags: DiagnosticMessages) -> Iterator[DiagnosticMessages]:
    """Capture an exception raised in the block into ``diags``."""
    try:
        yield diags
    except Exception as error:  # noqa: BLE001 - every error becomes a diagnostic
        diags.extend(_into_messages(error))


def combine_diagnostics(error: BaseException, diags: DiagnosticMessages) -> DiagnosticMessages:
    """Return the diagnostics of ``error`` followed by those of ``diags``."""
    combined = _into_messages(error)
    combined.extend(diags)
    return combined