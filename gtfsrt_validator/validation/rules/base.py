"""Validation rule base class.

Each rule checks one aspect of a GTFS-realtime feed and is identified by a
stable code: E0xx for errors, W0xx for warnings. Rules are pure functions of
the validation context: they read it, never modify it, and never depend on
another rule's result.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from gtfsrt_validator.errors import MissingReferenceDataError
from gtfsrt_validator.models.context import ValidationContext
from gtfsrt_validator.models.reference import ReferenceMetadata
from gtfsrt_validator.validation.results import Occurrence, Severity


@dataclass(frozen=True)
class RuleMetadata:
    """Static description of a rule, as listed by the registry."""

    code: str
    severity: Severity
    title: str
    requires_reference: bool = False

    def to_dict(self) -> dict[str, object]:
        """Convert to JSON-serializable dict."""
        return {
            "code": self.code,
            "severity": self.severity.value,
            "title": self.title,
            "requires_reference": self.requires_reference,
        }


class ValidationRule(ABC):
    """Base class for all validation rules.

    Subclasses must define:
        code: Unique rule code (e.g. "E002")
        severity: ERROR or WARNING
        title: Human-readable summary of the rule

    Subclasses must implement:
        evaluate(): Scan the context and return occurrences in detection order
    """

    code: str
    severity: Severity
    title: str
    requires_reference: bool = False

    @abstractmethod
    def evaluate(self, context: ValidationContext) -> list[Occurrence]:
        """Run this rule against a validation context.

        Args:
            context: The immutable input of the run.

        Returns:
            Occurrences in the order they were found; empty if none.
        """
        ...

    @property
    def metadata(self) -> RuleMetadata:
        """Registry entry for this rule."""
        return RuleMetadata(
            code=self.code,
            severity=self.severity,
            title=self.title,
            requires_reference=self.requires_reference,
        )

    def _occurrence(self, entity_id: str | None, detail: str) -> Occurrence:
        """Helper to create an occurrence of this rule."""
        return Occurrence(rule_code=self.code, entity_id=entity_id, detail=detail)

    def _reference(self, context: ValidationContext) -> ReferenceMetadata:
        """Return reference lookups or raise if the context has none."""
        if context.reference_metadata is None:
            raise MissingReferenceDataError(self.code)
        return context.reference_metadata

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.code}>"
