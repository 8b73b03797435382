"""Validation result data structures.

These classes capture the occurrences produced by each rule and aggregate
them into a report that callers can count, filter and export as JSON.
Counts are always derived from the detailed occurrence lists.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level of a rule.

    ERROR: The feed violates the GTFS-realtime specification (E0xx codes)
    WARNING: The feed is legal but likely wrong or incomplete (W0xx codes)
    """

    ERROR = "error"
    WARNING = "warning"


class RuleStatus(Enum):
    """Whether a rule was evaluated to completion.

    OK: The rule ran; its occurrences are complete.
    FAILED: The rule raised; its occurrences must not be read as "no violation".
    """

    OK = "ok"
    FAILED = "failed"


@dataclass(frozen=True)
class Occurrence:
    """One located violation of a rule.

    Attributes:
        rule_code: Code of the rule that detected it (e.g. "E002").
        entity_id: Id of the offending FeedEntity, if any.
        detail: Human-readable explanation with the offending values.
    """

    rule_code: str
    entity_id: str | None
    detail: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "rule_code": self.rule_code,
            "entity_id": self.entity_id,
            "detail": self.detail,
        }


@dataclass(frozen=True)
class RuleResult:
    """Outcome of one rule over one context.

    Attributes:
        rule_code: Code of the rule.
        severity: Severity of the rule.
        title: Short description of the rule.
        occurrences: Violations in detection order.
        status: OK, or FAILED if the rule raised.
        failure: Error text when status is FAILED.
    """

    rule_code: str
    severity: Severity
    title: str
    occurrences: tuple[Occurrence, ...] = ()
    status: RuleStatus = RuleStatus.OK
    failure: str | None = None

    @property
    def count(self) -> int:
        """Number of occurrences."""
        return len(self.occurrences)

    @property
    def failed(self) -> bool:
        """True if the rule could not be evaluated."""
        return self.status is RuleStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d: dict[str, Any] = {
            "rule_code": self.rule_code,
            "severity": self.severity.value,
            "title": self.title,
            "status": self.status.value,
            "count": self.count,
            "occurrences": [o.to_dict() for o in self.occurrences],
        }
        if self.failure is not None:
            d["failure"] = self.failure
        return d


@dataclass
class ValidationReport:
    """Aggregate of every rule result from one validation run.

    Results are keyed by rule code and kept in the order the rules ran.
    A code that is absent and a code with an empty occurrence list both mean
    "no violation".
    """

    results: dict[str, RuleResult] = field(default_factory=dict)

    def add(self, result: RuleResult) -> None:
        """Store the result of one rule."""
        self.results[result.rule_code] = result

    def __iter__(self) -> Iterator[RuleResult]:
        return iter(self.results.values())

    def __contains__(self, rule_code: object) -> bool:
        return rule_code in self.results

    def __len__(self) -> int:
        return len(self.results)

    def get(self, rule_code: str) -> RuleResult | None:
        """Return the result for a code, or None if the rule did not run."""
        return self.results.get(rule_code)

    def occurrences(self, rule_code: str) -> tuple[Occurrence, ...]:
        """Occurrences for a code; empty when the rule is absent."""
        result = self.results.get(rule_code)
        return result.occurrences if result is not None else ()

    def count(self, rule_code: str) -> int:
        """Occurrence count for a code.

        Returns 0 both when the rule is absent and when it FAILED, since a
        failed rule records no occurrences. Check ``failed`` (or
        ``get(rule_code).status``) to tell a failed rule from a clean one.
        """
        return len(self.occurrences(rule_code))

    def counts(self) -> Mapping[str, int]:
        """Occurrence count per rule that ran without failing."""
        return {code: r.count for code, r in self.results.items() if not r.failed}

    @property
    def violations(self) -> list[RuleResult]:
        """Results with at least one occurrence."""
        return [r for r in self.results.values() if r.count > 0]

    @property
    def errors(self) -> list[RuleResult]:
        """ERROR-severity results with occurrences."""
        return [r for r in self.violations if r.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[RuleResult]:
        """WARNING-severity results with occurrences."""
        return [r for r in self.violations if r.severity == Severity.WARNING]

    @property
    def failed(self) -> list[RuleResult]:
        """Results of rules that raised instead of completing."""
        return [r for r in self.results.values() if r.failed]

    @property
    def passed(self) -> bool:
        """True if no ERROR-severity rule has occurrences or failed."""
        return not self.errors and not any(
            r.severity == Severity.ERROR for r in self.failed
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict for --json output."""
        return {
            "passed": self.passed,
            "error_count": sum(r.count for r in self.errors),
            "warning_count": sum(r.count for r in self.warnings),
            "failed_rules": [r.rule_code for r in self.failed],
            "counts": dict(self.counts()),
            "results": [r.to_dict() for r in self.results.values()],
        }
