"""Tests for the rule registry."""

from __future__ import annotations

import re

import pytest

from gtfsrt_validator.errors import DuplicateRuleError, UnknownRuleError
from gtfsrt_validator.models import ValidationContext
from gtfsrt_validator.validation import (
    DEFAULT_REGISTRY,
    Occurrence,
    RuleRegistry,
    Severity,
    ValidationRule,
    list_rules,
    lookup,
)

CODE_PATTERN = re.compile(r"^[EW]\d{3}$")


class _Rule(ValidationRule):
    severity = Severity.ERROR
    title = "Test rule"

    def __init__(self, code: str) -> None:
        self.code = code

    def evaluate(self, _context: ValidationContext) -> list[Occurrence]:
        return []


class TestDefaultRegistry:
    """Tests for the built-in rule catalogue."""

    @pytest.mark.unit
    def test_lists_every_documented_rule(self) -> None:
        codes = {m.code for m in list_rules()}

        assert {"E002", "E036", "E037", "E038", "E039", "W009"} <= codes
        assert {"E003", "E011", "E022", "E025", "E040", "E041", "E042", "E043", "E044"} <= codes

    @pytest.mark.unit
    def test_codes_are_well_formed_and_unique(self) -> None:
        codes = [m.code for m in list_rules()]

        assert len(codes) == len(set(codes))
        assert all(CODE_PATTERN.match(code) for code in codes)

    @pytest.mark.unit
    def test_severity_follows_code_prefix(self) -> None:
        for metadata in list_rules():
            expected = Severity.ERROR if metadata.code.startswith("E") else Severity.WARNING
            assert metadata.severity == expected, metadata.code

    @pytest.mark.unit
    def test_lookup_returns_metadata(self) -> None:
        metadata = lookup("W009")

        assert metadata.code == "W009"
        assert metadata.severity == Severity.WARNING
        assert "schedule_relationship" in metadata.title

    @pytest.mark.unit
    def test_lookup_unknown_code_raises(self) -> None:
        with pytest.raises(UnknownRuleError) as exc_info:
            lookup("E999")

        assert exc_info.value.rule_code == "E999"

    @pytest.mark.unit
    def test_reference_rules_are_flagged(self) -> None:
        flagged = {m.code for m in list_rules() if m.requires_reference}

        assert flagged == {"E003", "E011"}

    @pytest.mark.unit
    def test_metadata_to_dict(self) -> None:
        assert DEFAULT_REGISTRY.get_metadata("E038").to_dict() == {
            "code": "E038",
            "severity": "error",
            "title": "Invalid header.gtfs_realtime_version",
            "requires_reference": False,
        }


class TestRuleRegistry:
    """Tests for RuleRegistry construction and selection."""

    @pytest.mark.unit
    def test_duplicate_code_raises(self) -> None:
        with pytest.raises(DuplicateRuleError):
            RuleRegistry([_Rule("E001"), _Rule("E001")])

    @pytest.mark.unit
    def test_keeps_registration_order(self) -> None:
        registry = RuleRegistry([_Rule("W002"), _Rule("E001")])

        assert registry.codes() == ("W002", "E001")
        assert [m.code for m in registry.list_rules()] == ["W002", "E001"]

    @pytest.mark.unit
    def test_select_none_returns_all(self) -> None:
        registry = RuleRegistry([_Rule("E001"), _Rule("E002")])

        assert [r.code for r in registry.select(None)] == ["E001", "E002"]

    @pytest.mark.unit
    def test_select_subset_uses_registry_order(self) -> None:
        registry = RuleRegistry([_Rule("E001"), _Rule("E002"), _Rule("E003")])

        assert [r.code for r in registry.select(["E003", "E001"])] == ["E001", "E003"]

    @pytest.mark.unit
    def test_select_accepts_single_code_string(self) -> None:
        registry = RuleRegistry([_Rule("E001"), _Rule("E002")])

        assert [r.code for r in registry.select("E002")] == ["E002"]

    @pytest.mark.unit
    def test_select_unknown_code_raises(self) -> None:
        registry = RuleRegistry([_Rule("E001")])

        with pytest.raises(UnknownRuleError):
            registry.select(["E001", "E404"])

    @pytest.mark.unit
    def test_contains_and_len(self) -> None:
        registry = RuleRegistry([_Rule("E001")])

        assert "E001" in registry
        assert "E002" not in registry
        assert len(registry) == 1
