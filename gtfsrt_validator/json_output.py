"""JSON envelopes for machine-readable CLI output.

Every command prints exactly one envelope to stdout:

    {
        "success": true|false,
        "command": "check",
        "data": {...},
        "errors": [...]  # only when success is false
    }

A failed check still carries its full report under "data", so consumers can
read the occurrences that made it fail.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from gtfsrt_validator.errors import GtfsRtValidatorError
from gtfsrt_validator.validation import RuleMetadata, ValidationReport


@dataclass(frozen=True)
class ErrorDetail:
    """One entry of the envelope's errors array.

    Attributes:
        type: Error class name, or "RuleViolation" for a failing rule.
        message: Human-readable description.
        code: GTFSRT-* error code or rule code, when there is one.
    """

    type: str
    message: str
    code: str | None = None

    @classmethod
    def from_error(cls, err: GtfsRtValidatorError) -> ErrorDetail:
        return cls(type=type(err).__name__, message=err.message, code=err.code)

    def to_dict(self) -> dict[str, str]:
        d = {"type": self.type, "message": self.message}
        if self.code is not None:
            d["code"] = self.code
        return d


@dataclass(frozen=True)
class OutputEnvelope:
    """Wrapper shared by all JSON command output."""

    success: bool
    command: str
    data: dict[str, Any]
    errors: tuple[ErrorDetail, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict; "errors" is only present on failure."""
        result: dict[str, Any] = {
            "success": self.success,
            "command": self.command,
            "data": self.data,
        }
        if not self.success:
            result["errors"] = [e.to_dict() for e in self.errors]
        return result

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def success_envelope(command: str, data: dict[str, Any]) -> OutputEnvelope:
    """Create a success envelope with the given command and data."""
    return OutputEnvelope(success=True, command=command, data=data)


def error_envelope(
    command: str,
    errors: Iterable[ErrorDetail],
    *,
    data: dict[str, Any] | None = None,
) -> OutputEnvelope:
    """Create an error envelope; data defaults to an empty dict."""
    return OutputEnvelope(
        success=False,
        command=command,
        data=data if data is not None else {},
        errors=tuple(errors),
    )


def check_envelope(report: ValidationReport, *, feed: str, timestamp: int) -> OutputEnvelope:
    """Envelope for the check command.

    The report decides success. Each error-severity rule with occurrences, and
    each rule that could not be evaluated, becomes one entry in "errors".
    """
    data = report.to_dict()
    data["feed"] = feed
    data["timestamp"] = timestamp
    if report.passed:
        return success_envelope("check", data)

    errors = [
        ErrorDetail(
            type="RuleViolation",
            message=f"{r.rule_code}: {r.title} ({r.count})",
            code=r.rule_code,
        )
        for r in report.errors
    ]
    errors.extend(
        ErrorDetail(type="RuleNotEvaluated", message=r.failure or "", code=r.rule_code)
        for r in report.failed
    )
    return error_envelope("check", errors, data=data)


def rules_envelope(rules: Iterable[RuleMetadata]) -> OutputEnvelope:
    """Envelope for the rules command."""
    return success_envelope("rules", {"rules": [m.to_dict() for m in rules]})
