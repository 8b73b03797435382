"""Rule registry: the process-wide catalogue of validation rules.

The registry is built once at import time and never modified afterwards,
so concurrent validation runs can read it without locking.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from gtfsrt_validator.errors import DuplicateRuleError, UnknownRuleError
from gtfsrt_validator.validation.rules import BUILTIN_RULES, RuleMetadata, ValidationRule


class RuleRegistry:
    """Ordered, read-only mapping from rule code to rule."""

    def __init__(self, rules: Iterable[ValidationRule]) -> None:
        """Register rules in the given order.

        Raises:
            DuplicateRuleError: If two rules share a code.
        """
        by_code: dict[str, ValidationRule] = {}
        for rule in rules:
            if rule.code in by_code:
                raise DuplicateRuleError(rule.code)
            by_code[rule.code] = rule
        self._rules = MappingProxyType(by_code)

    def __contains__(self, code: object) -> bool:
        return code in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def codes(self) -> tuple[str, ...]:
        """All registered codes in registration order."""
        return tuple(self._rules)

    def list_rules(self) -> tuple[RuleMetadata, ...]:
        """Metadata of every registered rule in registration order."""
        return tuple(rule.metadata for rule in self._rules.values())

    def lookup(self, code: str) -> ValidationRule:
        """Return the rule registered under code.

        Raises:
            UnknownRuleError: If no rule has that code.
        """
        try:
            return self._rules[code]
        except KeyError:
            raise UnknownRuleError(code) from None

    def get_metadata(self, code: str) -> RuleMetadata:
        """Return the metadata of the rule registered under code."""
        return self.lookup(code).metadata

    def select(self, codes: Iterable[str] | None = None) -> tuple[ValidationRule, ...]:
        """Resolve a subset of codes to rules, in registry order.

        Args:
            codes: Codes to select. None selects every rule.

        Raises:
            UnknownRuleError: If any code is not registered. Raised before
                anything runs.
        """
        if codes is None:
            return tuple(self._rules.values())
        if isinstance(codes, str):
            codes = [codes]
        wanted = set()
        for code in codes:
            if code not in self._rules:
                raise UnknownRuleError(code)
            wanted.add(code)
        return tuple(rule for code, rule in self._rules.items() if code in wanted)


DEFAULT_REGISTRY = RuleRegistry(BUILTIN_RULES)


def list_rules() -> tuple[RuleMetadata, ...]:
    """List every built-in rule."""
    return DEFAULT_REGISTRY.list_rules()


def lookup(code: str) -> RuleMetadata:
    """Look up a built-in rule's metadata by code."""
    return DEFAULT_REGISTRY.get_metadata(code)
