"""Validation runner that evaluates rules against one context."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gtfsrt_validator.errors import MissingReferenceDataError
from gtfsrt_validator.models.context import ValidationContext
from gtfsrt_validator.validation.registry import DEFAULT_REGISTRY, RuleRegistry
from gtfsrt_validator.validation.results import RuleResult, RuleStatus, ValidationReport
from gtfsrt_validator.validation.rules.base import ValidationRule

logger = logging.getLogger(__name__)


def evaluate_rule(rule: ValidationRule, context: ValidationContext) -> RuleResult:
    """Evaluate a single rule, turning an exception into a FAILED result.

    A failing rule must not hide the violations other rules would report.
    """
    logger.debug("Evaluating rule %s", rule.code)
    try:
        occurrences = rule.evaluate(context)
    except MissingReferenceDataError as err:
        logger.warning("Skipping %s: %s", rule.code, err.message)
        return _failed(rule, err.message)
    except Exception as err:
        logger.exception("Rule %s raised while evaluating the feed", rule.code)
        return _failed(rule, f"{type(err).__name__}: {err}")

    return RuleResult(
        rule_code=rule.code,
        severity=rule.severity,
        title=rule.title,
        occurrences=tuple(occurrences),
    )


def _failed(rule: ValidationRule, failure: str) -> RuleResult:
    return RuleResult(
        rule_code=rule.code,
        severity=rule.severity,
        title=rule.title,
        status=RuleStatus.FAILED,
        failure=failure,
    )


def run(
    context: ValidationContext,
    rules: Iterable[str] | None = None,
    *,
    registry: RuleRegistry = DEFAULT_REGISTRY,
) -> ValidationReport:
    """Run validation rules against a context.

    Args:
        context: Feed snapshot, reference data and validation timestamp.
        rules: Optional rule codes to evaluate. Defaults to every registered rule.
        registry: Registry to resolve codes against.

    Returns:
        ValidationReport with one RuleResult per selected rule.

    Raises:
        UnknownRuleError: If a selected code is not registered.
    """
    selected = registry.select(rules)
    report = ValidationReport()

    for rule in selected:
        report.add(evaluate_rule(rule, context))

    logger.debug(
        "Validated %d entities with %d rules: %d errors, %d warnings, %d failed",
        len(context.current.entities),
        len(selected),
        len(report.errors),
        len(report.warnings),
        len(report.failed),
    )
    return report
