"""gtfsrt-validator - Check GTFS-realtime feeds against the GTFS-realtime rules."""

from gtfsrt_validator.models import (
    FeedMessage,
    ReferenceData,
    ReferenceMetadata,
    ValidationContext,
)
from gtfsrt_validator.validation import (
    Occurrence,
    RuleResult,
    Severity,
    ValidationReport,
    list_rules,
    lookup,
    run,
)

__all__ = [
    "FeedMessage",
    "Occurrence",
    "ReferenceData",
    "ReferenceMetadata",
    "RuleResult",
    "Severity",
    "ValidationContext",
    "ValidationReport",
    "list_rules",
    "lookup",
    "run",
]
