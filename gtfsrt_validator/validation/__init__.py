"""Validation engine for GTFS-realtime feeds.

This module provides the public API for validating feeds:
- run(): Evaluate rules against a ValidationContext
- ValidationReport: Occurrences per rule code
- ValidationRule: Base class for rules
- list_rules() / lookup(): Inspect the rule registry
"""

from gtfsrt_validator.validation.registry import (
    DEFAULT_REGISTRY,
    RuleRegistry,
    list_rules,
    lookup,
)
from gtfsrt_validator.validation.results import (
    Occurrence,
    RuleResult,
    RuleStatus,
    Severity,
    ValidationReport,
)
from gtfsrt_validator.validation.rules import RuleMetadata, ValidationRule
from gtfsrt_validator.validation.runner import run

__all__ = [
    "DEFAULT_REGISTRY",
    "Occurrence",
    "RuleMetadata",
    "RuleRegistry",
    "RuleResult",
    "RuleStatus",
    "Severity",
    "ValidationReport",
    "ValidationRule",
    "list_rules",
    "lookup",
    "run",
]
