"""gtfsrt-validator CLI - replay GTFS-realtime feed samples through the validator.

The CLI is a thin wrapper around the Python API (see validation/runner.py).
All business logic lives in the library; the CLI handles user interaction.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import NoReturn

import click

from gtfsrt_validator.config import get_rule_codes, get_setting
from gtfsrt_validator.decode import load_feed
from gtfsrt_validator.errors import ConfigInvalidValueError, GtfsRtValidatorError
from gtfsrt_validator.json_output import (
    ErrorDetail,
    OutputEnvelope,
    check_envelope,
    error_envelope,
    rules_envelope,
)
from gtfsrt_validator.models.context import ValidationContext
from gtfsrt_validator.output import detail, error, info, severity, success, warn
from gtfsrt_validator.validation import DEFAULT_REGISTRY, RuleResult, ValidationReport
from gtfsrt_validator.validation import run as run_validation

# Occurrence details printed per rule unless --verbose
MAX_DETAILS = 5


def should_output_json(ctx: click.Context, json_flag: bool = False) -> bool:
    """True if either the group-level --format json or the command's --json flag is set."""
    obj = ctx.find_root().obj or {}
    global_format = obj.get("format", "text")
    return global_format == "json" or json_flag


def output_json_envelope(envelope: OutputEnvelope) -> None:
    """Output a JSON envelope to stdout."""
    click.echo(envelope.to_json())


def _fail(command: str, err: GtfsRtValidatorError, *, use_json: bool) -> NoReturn:
    """Report a structured error and exit with status 1."""
    if use_json:
        output_json_envelope(error_envelope(command, [ErrorDetail.from_error(err)]))
    else:
        error(err.message)
    raise SystemExit(1) from err


@click.group()
@click.version_option(package_name="gtfsrt-validator")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format (json for machine parsing, text for humans).",
)
@click.pass_context
def cli(ctx: click.Context, output_format: str) -> None:
    """gtfsrt-validator - Check GTFS-realtime feeds against the GTFS-realtime rules."""
    ctx.ensure_object(dict)
    ctx.obj["format"] = output_format


def _resolve_codes(
    rule: tuple[str, ...], ignore: tuple[str, ...], project_path: Path
) -> list[str]:
    """Pick the rule codes to run.

    Without an explicit selection, rules that need static schedule data are
    left out because the CLI does not load any.

    Raises:
        UnknownRuleError: If a selected or ignored code is not registered.
    """
    selected = get_rule_codes("rules", cli_value=rule, project_path=project_path)
    ignored = set(get_rule_codes("ignore", cli_value=ignore, project_path=project_path) or [])
    for code in sorted(ignored):
        DEFAULT_REGISTRY.lookup(code)

    if selected is None:
        codes = [m.code for m in DEFAULT_REGISTRY.list_rules() if not m.requires_reference]
    else:
        for code in selected:
            DEFAULT_REGISTRY.lookup(code)
        codes = selected
    return [code for code in codes if code not in ignored]


def _resolve_timestamp(configured: object | None, header_timestamp: int | None) -> int:
    """Validation time: configured value, else the header timestamp, else now.

    Raises:
        ConfigInvalidValueError: If the configured value is not POSIX seconds.
    """
    if configured is None:
        return header_timestamp if header_timestamp is not None else int(time.time())
    if isinstance(configured, bool):
        raise ConfigInvalidValueError("timestamp", configured, "must be POSIX seconds")
    try:
        return int(configured)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise ConfigInvalidValueError("timestamp", configured, "must be POSIX seconds") from None


def _print_rule_result(result: RuleResult, *, verbose: bool) -> None:
    """Print a single rule result with appropriate formatting."""
    msg = f"{result.rule_code}: {result.title}"
    if result.failed:
        warn(f"{msg} (not evaluated: {result.failure})")
        return
    if result.count == 0:
        if verbose:
            success(msg)
        return

    severity(result.severity, f"{msg} ({result.count})")

    shown = result.occurrences if verbose else result.occurrences[:MAX_DETAILS]
    for occurrence in shown:
        where = f"entity {occurrence.entity_id}: " if occurrence.entity_id else ""
        detail(f"  {where}{occurrence.detail}")
    hidden = result.count - len(shown)
    if hidden:
        detail(f"  ... and {hidden} more (use --verbose to list all)")


def _print_check_summary(report: ValidationReport) -> None:
    """Print the closing line: clean, passed with warnings, or failed."""
    error_count = sum(r.count for r in report.errors)
    warning_count = sum(r.count for r in report.warnings)

    if not error_count and not warning_count and not report.failed:
        success("No violations found")
        return

    parts = []
    if error_count:
        parts.append(f"{error_count} error{'s' if error_count != 1 else ''}")
    if warning_count:
        parts.append(f"{warning_count} warning{'s' if warning_count != 1 else ''}")
    if report.failed:
        parts.append(f"{len(report.failed)} rule(s) not evaluated")
    summary = ", ".join(parts)
    if report.passed:
        warn(f"Validation passed with {summary}")
    else:
        error(f"Validation failed: {summary}")


@cli.command()
@click.argument("feed", type=click.Path(path_type=Path))
@click.option(
    "--previous",
    type=click.Path(path_type=Path),
    default=None,
    help="Previous feed message of the same source, for cross-fetch checks.",
)
@click.option("--rule", "-r", multiple=True, help="Only evaluate this rule code (repeatable).")
@click.option("--ignore", "-i", multiple=True, help="Skip this rule code (repeatable).")
@click.option(
    "--timestamp",
    type=int,
    default=None,
    help="Validation time in POSIX seconds (default: header timestamp, else now).",
)
@click.option(
    "--config-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=".",
    help="Directory containing .gtfsrt/config.yaml.",
)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Show passing rules and every occurrence")
@click.pass_context
def check(
    ctx: click.Context,
    feed: Path,
    previous: Path | None,
    rule: tuple[str, ...],
    ignore: tuple[str, ...],
    timestamp: int | None,
    config_dir: Path,
    json_output: bool,
    verbose: bool,
) -> None:
    """Validate a GTFS-realtime feed file.

    FEED is a protobuf-encoded FeedMessage.
    """
    use_json = should_output_json(ctx, json_output)

    try:
        codes = _resolve_codes(rule, ignore, config_dir)
        current = load_feed(feed)
        previous_message = load_feed(previous) if previous is not None else None
        configured = get_setting("timestamp", cli_value=timestamp, project_path=config_dir)
        validated_at = _resolve_timestamp(configured, current.header.timestamp)
    except GtfsRtValidatorError as err:
        _fail("check", err, use_json=use_json)

    context = ValidationContext.build(current, timestamp=validated_at, previous=previous_message)
    report = run_validation(context, codes)

    if use_json:
        output_json_envelope(check_envelope(report, feed=str(feed), timestamp=validated_at))
    else:
        info(f"Validating {feed} ({len(current.entities)} entities, {len(codes)} rules)")
        for result in report:
            _print_rule_result(result, verbose=verbose)
        _print_check_summary(report)

    # Exit code: 1 if any errors (not warnings)
    if not report.passed:
        raise SystemExit(1)


@cli.command("rules")
@click.option("--json", "json_output", is_flag=True, help="Output rule list as JSON")
@click.pass_context
def list_rules_command(ctx: click.Context, json_output: bool) -> None:
    """List every validation rule with its severity and title."""
    rules = DEFAULT_REGISTRY.list_rules()

    if should_output_json(ctx, json_output):
        output_json_envelope(rules_envelope(rules))
        return

    for metadata in rules:
        suffix = " [needs GTFS schedule]" if metadata.requires_reference else ""
        info(f"{metadata.code} {metadata.severity.value:<7} {metadata.title}{suffix}")


if __name__ == "__main__":
    cli()
