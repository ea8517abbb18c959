"""Policy violations and the errors raised while evaluating policies."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from semweaver.diagnostic import DiagnosticMessages
from semweaver.errors import WeaverError, format_errors

_SEMCONV_ATTRIBUTE = "semconv_attribute"
_VIOLATION_FIELDS = ("id", "category", "group", "attr")


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return f"boolean `{str(value).lower()}`"
    if isinstance(value, int):
        return f"integer `{value}`"
    if isinstance(value, float):
        return f"floating point `{value}`"
    if isinstance(value, str):
        return f"string {json.dumps(value)}"
    if isinstance(value, Mapping):
        return "map"
    if isinstance(value, (list, tuple, set, frozenset)):
        return "sequence"
    return type(value).__name__


@dataclass(frozen=True)
class Violation:
    """A violation related to semantic convention attributes."""

    id: str
    category: str
    group: str
    attr: str

    def __str__(self) -> str:
        return (
            f"id={self.id}, category={self.category}, "
            f"group={self.group}, attr={self.attr}"
        )

    @classmethod
    def from_dict(cls, data: Any) -> Violation:
        """Build a violation from its tagged mapping form.

        Raises ``ValueError`` when the type tag is missing or unknown, when a
        field is missing, unknown or not a string.
        """
        if not isinstance(data, Mapping):
            raise ValueError(
                f"invalid type: {_describe(data)}, expected internally tagged enum Violation"
            )
        if "type" not in data:
            raise ValueError("missing field `type`")
        tag = data["type"]
        if tag != _SEMCONV_ATTRIBUTE:
            raise ValueError(f"unknown variant `{tag}`, expected `{_SEMCONV_ATTRIBUTE}`")
        expected = ", ".join(f"`{name}`" for name in _VIOLATION_FIELDS)
        for key in data:
            if key != "type" and key not in _VIOLATION_FIELDS:
                raise ValueError(f"unknown field `{key}`, expected one of {expected}")
        values: dict[str, str] = {}
        for name in _VIOLATION_FIELDS:
            if name not in data:
                raise ValueError(f"missing field `{name}`")
            value = data[name]
            if not isinstance(value, str):
                raise ValueError(f"invalid type: {_describe(value)}, expected a string")
            values[name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        """The tagged mapping form of the violation."""
        return {
            "type": _SEMCONV_ATTRIBUTE,
            "id": self.id,
            "category": self.category,
            "group": self.group,
            "attr": self.attr,
        }


class PolicyStage(Enum):
    """The stages at which policies are evaluated."""

    BEFORE_RESOLUTION = "before_resolution"
    AFTER_RESOLUTION = "after_resolution"

    def __str__(self) -> str:
        return self.value

    @property
    def package(self) -> str:
        """The policy package evaluated at this stage."""
        return f"data.{self.value}"

    @property
    def deny_rule(self) -> str:
        """The rule holding the violations of this stage."""
        return f"data.{self.value}.deny"


class CheckerError(WeaverError):
    """An error that can occur while evaluating policies."""

    kind = "checker_error"
    help: str | None = None

    @classmethod
    def compound(cls, errors: Iterable[WeaverError]) -> CompoundError:
        flattened: list[WeaverError] = []
        for error in errors:
            if isinstance(error, CompoundError):
                flattened.extend(error.errors)
            else:
                flattened.append(error)
        return CompoundError(flattened)

    def _fields(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, **self._fields()}


class InvalidPolicyFile(CheckerError):
    """A policy file could not be loaded."""

    kind = "invalid_policy_file"
    help = "Check the policy file for syntax errors."

    def __init__(self, file: str, error: str) -> None:
        self.file = file
        self.error = error
        super().__init__(f"Invalid policy file '{file}', error: {error})")

    def _fields(self) -> dict[str, Any]:
        return {"file": self.file, "error": self.error}


class InvalidPolicyGlobPattern(CheckerError):
    """A policy glob pattern is malformed."""

    kind = "invalid_policy_glob_pattern"
    help = "Check the glob pattern for syntax errors."

    def __init__(self, pattern: str, error: str) -> None:
        self.pattern = pattern
        self.error = error
        super().__init__(f"Invalid policy glob pattern '{pattern}', error: {error})")

    def _fields(self) -> dict[str, Any]:
        return {"pattern": self.pattern, "error": self.error}


class InvalidData(CheckerError):
    """A data document could not be used."""

    kind = "invalid_data"

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(f"Invalid data, error: {error})")

    def _fields(self) -> dict[str, Any]:
        return {"error": self.error}


class InvalidInput(CheckerError):
    """An input document could not be used."""

    kind = "invalid_input"

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(f"Invalid input, error: {error})")

    def _fields(self) -> dict[str, Any]:
        return {"error": self.error}


class ViolationEvaluationError(CheckerError):
    """The violations produced by the policies could not be evaluated."""

    kind = "violation_evaluation_error"

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(f"Violation evaluation error: {error}")

    def _fields(self) -> dict[str, Any]:
        return {"error": self.error}


class PolicyViolation(CheckerError):
    """A policy was violated."""

    kind = "policy_violation"

    def __init__(self, provenance: str, violation: Violation) -> None:
        self.provenance = provenance
        self.violation = violation
        super().__init__(f"Policy violation: {violation}, provenance: {provenance}")

    def _fields(self) -> dict[str, Any]:
        return {"provenance": self.provenance, "violation": self.violation.to_dict()}


class CompoundError(CheckerError):
    """A container for several errors."""

    kind = "compound_error"

    def __init__(self, errors: Iterable[WeaverError]) -> None:
        self.errors = list(errors)
        super().__init__(json.dumps(format_errors(self.errors), ensure_ascii=False))

    def _fields(self) -> dict[str, Any]:
        return {
            "errors": [
                error.to_dict() if isinstance(error, CheckerError) else str(error)
                for error in self.errors
            ]
        }


def parse_violations(value: Any) -> list[Violation]:
    """Turn the value of a deny rule into violations.

    Raises ``ViolationEvaluationError`` when the value is not a sequence of
    well-formed violations.
    """
    if not isinstance(value, (list, tuple)):
        raise ViolationEvaluationError(
            f"invalid type: {_describe(value)}, expected a sequence"
        )
    try:
        return [Violation.from_dict(item) for item in value]
    except ValueError as error:
        raise ViolationEvaluationError(str(error)) from error


def to_diagnostic_messages(error: BaseException) -> DiagnosticMessages:
    """Convert an error into diagnostics, one per error in a compound."""
    if isinstance(error, CompoundError):
        result = DiagnosticMessages.empty()
        for inner in error.errors:
            result.extend(to_diagnostic_messages(inner))
        return result
    return DiagnosticMessages.from_error(error)